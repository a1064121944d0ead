"""Stateless cart operations over plain sequences of cart lines.

Reducer-style counterpart of ``ShoppingCart``: every function takes the
current lines and returns a new list, leaving the input untouched. Lines
that are not affected by a call are shared between the old and new list;
they are immutable, so sharing is safe. There are no events.
"""

from collections.abc import Sequence
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict

from dessertshop.cart.items import CartItem, ensure_whole_quantity
from dessertshop.catalogue.dessert import Dessert
from dessertshop.errors import NotFoundError, ValidationError
from dessertshop.shared.money import round_money


class CartTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: float
    tax: float
    total: float


def _index_of(cart: Sequence[CartItem], dessert_id: str) -> int:
    return next((i for i, item in enumerate(cart) if item.dessert.id == dessert_id), -1)


def add_to_cart(cart: Sequence[CartItem], dessert: Dessert, quantity: int = 1) -> list[CartItem]:
    """Return a new cart with ``quantity`` more of ``dessert``."""
    ensure_whole_quantity(quantity)
    if quantity <= 0:
        raise ValidationError({"quantity": ["Quantity must be greater than 0"]})
    if not dessert.in_stock:
        raise ValidationError({"dessert": [f"Dessert {dessert.id} is not in stock"]})

    new_cart = list(cart)
    index = _index_of(cart, dessert.id)
    if index >= 0:
        existing = new_cart[index]
        new_cart[index] = existing.model_copy(update={"quantity": existing.quantity + quantity})
    else:
        new_cart.append(CartItem(dessert=dessert, quantity=quantity, added_at=datetime.now(UTC)))
    return new_cart


def remove_from_cart(cart: Sequence[CartItem], dessert_id: str) -> list[CartItem]:
    return [item for item in cart if item.dessert.id != dessert_id]


def update_quantity(cart: Sequence[CartItem], dessert_id: str, quantity: int) -> list[CartItem]:
    """Return a new cart with the line's quantity set; zero removes the line."""
    ensure_whole_quantity(quantity)
    if quantity < 0:
        raise ValidationError({"quantity": ["Quantity cannot be negative"]})

    if quantity == 0:
        return remove_from_cart(cart, dessert_id)

    index = _index_of(cart, dessert_id)
    if index == -1:
        raise NotFoundError({"dessert_id": [f"Item {dessert_id} not found in cart"]})

    new_cart = list(cart)
    new_cart[index] = new_cart[index].model_copy(update={"quantity": quantity})
    return new_cart


def increment_quantity(cart: Sequence[CartItem], dessert_id: str) -> list[CartItem]:
    item = _find_existing(cart, dessert_id)
    return update_quantity(cart, dessert_id, item.quantity + 1)


def decrement_quantity(cart: Sequence[CartItem], dessert_id: str) -> list[CartItem]:
    item = _find_existing(cart, dessert_id)
    return update_quantity(cart, dessert_id, max(0, item.quantity - 1))


def calculate_total(cart: Sequence[CartItem], tax_rate: float = 0) -> CartTotals:
    """Subtotal, tax and total for the given lines.

    ``total`` is computed from the unrounded tax so that it always matches
    ``ShoppingCart.get_total`` for the same lines.
    """
    subtotal = round_money(sum(item.line_total for item in cart))
    tax = subtotal * tax_rate
    return CartTotals(
        subtotal=subtotal,
        tax=round_money(tax),
        total=round_money(subtotal + tax),
    )


def get_cart_item_count(cart: Sequence[CartItem]) -> int:
    return sum(item.quantity for item in cart)


def is_cart_empty(cart: Sequence[CartItem]) -> bool:
    return len(cart) == 0


def find_cart_item(cart: Sequence[CartItem], dessert_id: str) -> CartItem | None:
    return next((item for item in cart if item.dessert.id == dessert_id), None)


def _find_existing(cart: Sequence[CartItem], dessert_id: str) -> CartItem:
    item = find_cart_item(cart, dessert_id)
    if item is None:
        raise NotFoundError({"dessert_id": [f"Item {dessert_id} not found in cart"]})
    return item
