"""Cart line item."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from dessertshop.catalogue.dessert import Dessert
from dessertshop.errors import ValidationError


class CartItem(BaseModel):
    """A dessert and how many of it are in a cart.

    Lines are immutable: changing a quantity produces a new ``CartItem``
    through ``model_copy(update=...)``, which does not re-run validation,
    so callers check quantities with ``ensure_whole_quantity`` first.
    """

    model_config = ConfigDict(frozen=True)

    dessert: Dessert
    quantity: int = Field(ge=1, strict=True)
    added_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def line_total(self) -> float:
        return self.dessert.price * self.quantity


def ensure_whole_quantity(quantity) -> None:
    # bool is an int subclass
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError({"quantity": ["Quantity must be a whole number"]})
