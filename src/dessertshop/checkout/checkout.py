"""Checkout flow: cart → confirmed order → completed order.

Mirrors what the storefront does when the customer presses "Confirm Order"
and later "Start New Order". Currency and tax default to the configured
settings.
"""

import structlog

from dessertshop.cart.cart import ShoppingCart
from dessertshop.config import get_settings
from dessertshop.order.manager import OrderManager
from dessertshop.order.order import Order
from dessertshop.shared.money import Currency

logger = structlog.get_logger(__name__)


def checkout(
    cart: ShoppingCart,
    orders: OrderManager,
    currency: Currency | str | None = None,
    tax_rate: float | None = None,
) -> Order:
    """Create an order from the cart and confirm it.

    The cart is left untouched so the caller can still show it next to the
    confirmation; call ``start_new_order`` to empty it.
    """
    if currency is None or tax_rate is None:
        settings = get_settings()
        currency = settings.currency if currency is None else currency
        tax_rate = settings.tax_rate if tax_rate is None else tax_rate

    order = orders.create_order(cart, currency=currency, tax_rate=tax_rate)
    confirmed = orders.confirm_order(order.id)

    logger.info(
        "Checkout complete",
        order_id=confirmed.id,
        item_count=cart.get_item_count(),
        total=confirmed.details.total,
    )
    return confirmed


def fulfil(orders: OrderManager, order_id: str) -> Order:
    """Mark a confirmed order as completed (handed over to the customer)."""
    return orders.complete_order(order_id)


def start_new_order(cart: ShoppingCart) -> None:
    cart.clear()
    logger.info("Started new order")
