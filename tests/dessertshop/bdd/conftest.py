"""Shared BDD fixtures and step definitions for carts and orders."""

import pytest
from dessertshop.cart.cart import ShoppingCart
from dessertshop.catalogue.data import get_dessert
from dessertshop.errors import InvalidStateError, InvalidTransitionError, ValidationError
from dessertshop.order.manager import OrderManager
from pytest_bdd import given, parsers, then

_ORDER_ERROR_CLASSES = {
    "invalid state": InvalidStateError,
    "invalid transition": InvalidTransitionError,
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def orders():
    return OrderManager()


@pytest.fixture()
def error():
    """Container for the error raised by the last When step."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart():
    return ShoppingCart()


@given(parsers.cfparse('a cart holding {quantity:d} x "{dessert_id}"'), target_fixture="cart")
def cart_holding(quantity, dessert_id):
    cart = ShoppingCart()
    cart.add_item(get_dessert(dessert_id), quantity)
    return cart


@given(parsers.cfparse('the cart also holds {quantity:d} x "{dessert_id}"'), target_fixture="cart")
def cart_also_holds(cart, quantity, dessert_id):
    cart.add_item(get_dessert(dessert_id), quantity)
    return cart


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the cart action fails with a validation error")
def cart_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("the order action fails with an {kind} error"))
def order_action_fails(error, kind):
    assert isinstance(error["exc"], _ORDER_ERROR_CLASSES[kind]), f"Got {error['exc']!r}"


@then(parsers.cfparse("the cart subtotal is {amount:f}"))
def cart_subtotal_is(cart, amount):
    assert cart.get_subtotal() == pytest.approx(amount)
