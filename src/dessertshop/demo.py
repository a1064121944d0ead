"""Dessert shop walkthrough CLI.

Runs a scripted session against the public API: fills a cart from the
catalogue, checks out, completes the order and restores a cart from saved
lines, printing what happens along the way.

Usage:
    dessertshop-demo
    dessertshop-demo --tax-rate 0.1 --currency EUR
"""

import argparse
import sys

from dessertshop.cart import functions as cart_functions
from dessertshop.cart.cart import ShoppingCart
from dessertshop.cart.events import CartEvent, CartEventType
from dessertshop.catalogue.data import DESSERTS, get_dessert
from dessertshop.checkout.checkout import checkout, fulfil, start_new_order
from dessertshop.config import get_settings
from dessertshop.errors import ConfigurationError, DessertShopError
from dessertshop.order.manager import OrderManager
from dessertshop.order.order import OrderStatus
from dessertshop.shared.money import Currency
from dessertshop.utils.logging import configure_logging


def describe_event(event: CartEvent) -> str:
    match event.type:
        case CartEventType.ITEM_ADDED:
            return f"added {event.item.dessert.name} (now {event.item.quantity}x)"
        case CartEventType.ITEM_REMOVED:
            return f"removed {event.dessert_id}"
        case CartEventType.QUANTITY_UPDATED:
            return f"{event.dessert_id} quantity set to {event.quantity}"
        case CartEventType.CART_CLEARED:
            return "cart cleared"
        case CartEventType.CART_LOADED:
            return f"loaded {len(event.items)} line(s)"


def run_functional(out) -> None:
    print("=== Functional cart ===", file=out)
    lines = []
    lines = cart_functions.add_to_cart(lines, DESSERTS[0], 1)
    lines = cart_functions.add_to_cart(lines, DESSERTS[1], 2)
    lines = cart_functions.increment_quantity(lines, DESSERTS[0].id)
    lines = cart_functions.decrement_quantity(lines, DESSERTS[1].id)
    totals = cart_functions.calculate_total(lines)
    print(f"  lines: {len(lines)}, items: {cart_functions.get_cart_item_count(lines)}", file=out)
    print(f"  subtotal: {totals.subtotal:.2f}, total: {totals.total:.2f}", file=out)


def run_session(out, currency: Currency, tax_rate: float) -> float:
    """Cart → order → completion. Returns total revenue."""
    print("=== Shopping cart ===", file=out)
    cart = ShoppingCart()
    unsubscribe = cart.subscribe(lambda event: print(f"  event: {describe_event(event)}", file=out))

    cart.add_item(get_dessert("tiramisu"), 1)
    cart.add_item(get_dessert("baklava"), 2)
    cart.add_item(get_dessert("meringue-pie"), 1)
    cart.increment_quantity("tiramisu")
    cart.update_quantity("baklava", 5)
    print(f"  items: {cart.get_item_count()}, subtotal: {cart.get_subtotal():.2f}", file=out)

    print("=== Orders ===", file=out)
    orders = OrderManager()
    order = checkout(cart, orders, currency=currency, tax_rate=tax_rate)
    details = order.details
    print(f"  {order.id}: {order.status.value}", file=out)
    print(
        f"  subtotal {details.subtotal:.2f} + tax {details.tax:.2f} = {details.total:.2f} {details.currency.value}",
        file=out,
    )
    completed = fulfil(orders, order.id)
    print(f"  {completed.id}: {completed.status.value}", file=out)

    saved = cart.get_items()
    start_new_order(cart)
    unsubscribe()

    restored = ShoppingCart()
    restored.load_items(saved)
    print(f"  restored cart subtotal: {restored.get_subtotal():.2f}", file=out)

    print("=== Error handling ===", file=out)
    for attempt in (
        lambda: restored.add_item(DESSERTS[0], 0),
        lambda: restored.update_quantity("non-existent-id", 5),
        lambda: orders.create_order(ShoppingCart()),
        lambda: orders.cancel_order(order.id),
    ):
        try:
            attempt()
        except DessertShopError as exc:
            print(f"  {type(exc).__name__}: {exc}", file=out)

    revenue = orders.get_total_revenue()
    completed_count = len(orders.get_orders_by_status(OrderStatus.COMPLETED))
    print(f"  completed orders: {completed_count}, revenue: {revenue:.2f}", file=out)
    return revenue


def main(argv=None, out=None) -> int:
    out = out or sys.stdout

    parser = argparse.ArgumentParser(
        description="Walk through the dessert shop cart and order lifecycle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        parser.error(f"invalid environment settings: {exc}")

    parser.add_argument(
        "--tax-rate", type=float, default=settings.tax_rate, help="Tax rate applied at checkout (default: %(default)s)"
    )
    parser.add_argument(
        "--currency",
        choices=[c.value for c in Currency],
        default=settings.currency.value,
        help="Order currency (default: %(default)s)",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Log level (default: %(default)s)")
    args = parser.parse_args(argv)

    if args.tax_rate < 0:
        parser.error("--tax-rate cannot be negative")

    configure_logging(level=args.log_level.upper())

    run_functional(out)
    run_session(out, Currency(args.currency), args.tax_rate)
    return 0


if __name__ == "__main__":
    sys.exit(main())
