"""Tests for the checkout flow: cart to confirmed and completed orders."""

import pytest
from dessertshop.cart.cart import ShoppingCart
from dessertshop.catalogue.data import get_dessert
from dessertshop.checkout.checkout import checkout, fulfil, start_new_order
from dessertshop.errors import InvalidStateError, InvalidTransitionError
from dessertshop.order.manager import OrderManager
from dessertshop.order.order import OrderStatus
from dessertshop.shared.money import Currency


@pytest.fixture
def cart():
    cart = ShoppingCart()
    cart.add_item(get_dessert("waffle-berries"), 1)
    cart.add_item(get_dessert("creme-brulee"), 2)
    return cart


@pytest.fixture
def orders():
    return OrderManager()


class TestCheckout:
    def test_creates_confirmed_order(self, cart, orders):
        order = checkout(cart, orders)
        assert order.status == OrderStatus.CONFIRMED
        assert order.confirmed_at is not None
        assert order.details.subtotal == 20.50
        assert orders.get_order(order.id) == order

    def test_leaves_cart_intact(self, cart, orders):
        checkout(cart, orders)
        assert cart.get_item_count() == 3

    def test_uses_configured_defaults(self, cart, orders, monkeypatch):
        monkeypatch.setenv("DESSERTSHOP_CURRENCY", "GBP")
        monkeypatch.setenv("DESSERTSHOP_TAX_RATE", "0.2")

        order = checkout(cart, orders)

        assert order.details.currency == Currency.GBP
        assert order.details.tax == 4.10
        assert order.details.total == 24.60

    def test_explicit_arguments_override_settings(self, cart, orders, monkeypatch):
        monkeypatch.setenv("DESSERTSHOP_TAX_RATE", "0.2")
        order = checkout(cart, orders, currency=Currency.EUR, tax_rate=0)
        assert order.details.currency == Currency.EUR
        assert order.details.tax == 0

    def test_empty_cart(self, orders):
        with pytest.raises(InvalidStateError):
            checkout(ShoppingCart(), orders)
        assert orders.get_all_orders() == []


class TestFulfilAndRestart:
    def test_fulfil_completes_order(self, cart, orders):
        order = checkout(cart, orders)
        completed = fulfil(orders, order.id)
        assert completed.status == OrderStatus.COMPLETED
        assert orders.get_total_revenue() == 20.50

    def test_fulfil_twice_fails(self, cart, orders):
        order = checkout(cart, orders)
        fulfil(orders, order.id)
        with pytest.raises(InvalidTransitionError):
            fulfil(orders, order.id)

    def test_start_new_order_clears_cart(self, cart, orders):
        events = []
        cart.subscribe(events.append)
        order = checkout(cart, orders)

        start_new_order(cart)

        assert cart.is_empty
        assert len(events) == 1
        assert orders.get_order(order.id).details.subtotal == 20.50

    def test_full_lifecycle_with_restored_cart(self, cart, orders):
        saved = cart.get_items()
        start_new_order(cart)

        restored = ShoppingCart()
        restored.load_items(saved)
        order = checkout(restored, orders, tax_rate=0.1)
        fulfil(orders, order.id)

        assert order.details.total == 22.55
        assert orders.get_total_revenue() == 22.55
