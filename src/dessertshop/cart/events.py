"""Events delivered to ShoppingCart subscribers."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from dessertshop.cart.items import CartItem


class CartEventType(Enum):
    ITEM_ADDED = "ITEM_ADDED"
    ITEM_REMOVED = "ITEM_REMOVED"
    QUANTITY_UPDATED = "QUANTITY_UPDATED"
    CART_CLEARED = "CART_CLEARED"
    CART_LOADED = "CART_LOADED"


class _CartEvent(BaseModel):
    model_config = ConfigDict(frozen=True)


class ItemAdded(_CartEvent):
    """A dessert was added; ``item`` is the resulting line (merged quantity)."""

    type: Literal[CartEventType.ITEM_ADDED] = CartEventType.ITEM_ADDED
    item: CartItem


class ItemRemoved(_CartEvent):
    """A line was removed from the cart."""

    type: Literal[CartEventType.ITEM_REMOVED] = CartEventType.ITEM_REMOVED
    dessert_id: str


class QuantityUpdated(_CartEvent):
    """The quantity of a line was set to a new positive value."""

    type: Literal[CartEventType.QUANTITY_UPDATED] = CartEventType.QUANTITY_UPDATED
    dessert_id: str
    quantity: int


class CartCleared(_CartEvent):
    """All lines were removed."""

    type: Literal[CartEventType.CART_CLEARED] = CartEventType.CART_CLEARED


class CartLoaded(_CartEvent):
    """The cart contents were replaced wholesale, e.g. restored from storage."""

    type: Literal[CartEventType.CART_LOADED] = CartEventType.CART_LOADED
    items: tuple[CartItem, ...]


CartEvent = ItemAdded | ItemRemoved | QuantityUpdated | CartCleared | CartLoaded
