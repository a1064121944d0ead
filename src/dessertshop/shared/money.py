"""Currency codes and monetary rounding."""

import math
from enum import Enum


class Currency(Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


def round_money(amount: float) -> float:
    """Round half up to two decimals.

    Python's ``round`` uses banker's rounding, which would turn 0.125 into
    0.12; prices here always round half up.
    """
    return math.floor(amount * 100 + 0.5) / 100
