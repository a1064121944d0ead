"""Environment configuration for the dessert shop.

Settings are read from environment variables once per call to
``get_settings()``; nothing is cached so tests can tweak the environment
with ``monkeypatch.setenv``.
"""

import os

from pydantic import BaseModel, ConfigDict, Field

from dessertshop.errors import ConfigurationError
from dessertshop.shared.money import Currency
from dessertshop.utils.logging import get_environment, get_log_level


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    environment: str = "development"
    log_level: str = "INFO"
    currency: Currency = Currency.USD
    tax_rate: float = Field(default=0.0, ge=0)


def _get_currency() -> Currency:
    value = os.getenv("DESSERTSHOP_CURRENCY", Currency.USD.value).strip().upper()
    try:
        return Currency(value)
    except ValueError:
        supported = ", ".join(c.value for c in Currency)
        raise ConfigurationError(
            {"DESSERTSHOP_CURRENCY": [f"Unsupported currency: {value}. Expected one of {supported}"]}
        ) from None


def _get_tax_rate() -> float:
    value = os.getenv("DESSERTSHOP_TAX_RATE", "0").strip()
    try:
        tax_rate = float(value)
    except ValueError:
        raise ConfigurationError({"DESSERTSHOP_TAX_RATE": [f"Tax rate must be a number, got '{value}'"]}) from None

    if tax_rate < 0:
        raise ConfigurationError({"DESSERTSHOP_TAX_RATE": ["Tax rate cannot be negative"]})
    return tax_rate


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings(
        environment=get_environment(),
        log_level=get_log_level(),
        currency=_get_currency(),
        tax_rate=_get_tax_rate(),
    )
