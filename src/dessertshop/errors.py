"""Exceptions raised by the dessert shop domain.

Every error carries a ``messages`` dict mapping a field (or ``"cart"``,
``"order"``, ``"status"``) to a list of human readable messages, so callers
can surface them next to the offending input.
"""


class DessertShopError(Exception):
    """Base exception for all dessert shop errors."""

    def __init__(self, messages: dict[str, list[str]]):
        self.messages = messages
        super().__init__(messages)

    def __str__(self) -> str:
        return "; ".join(f"{field}: {', '.join(errors)}" for field, errors in self.messages.items())


class ValidationError(DessertShopError):
    """Raised when an argument is rejected (bad quantity, out-of-stock dessert)."""


class NotFoundError(DessertShopError):
    """Raised when a dessert id is not in the cart or an order id is unknown."""


class InvalidStateError(DessertShopError):
    """Raised when an operation is not possible in the current state, e.g. ordering an empty cart."""


class InvalidTransitionError(DessertShopError):
    """Raised when an order status transition is not permitted."""


class ConfigurationError(DessertShopError):
    """Raised when environment configuration is invalid."""
