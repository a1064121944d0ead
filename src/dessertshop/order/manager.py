"""Order registry: turns carts into orders and drives them through their lifecycle."""

import itertools
import threading
import time

import structlog

from dessertshop.cart.cart import ShoppingCart
from dessertshop.errors import InvalidStateError, NotFoundError, ValidationError
from dessertshop.order.order import Order, OrderDetails, OrderStatus
from dessertshop.shared.money import Currency, round_money

logger = structlog.get_logger(__name__)


def _as_currency(currency: Currency | str) -> Currency:
    if isinstance(currency, Currency):
        return currency
    try:
        return Currency(currency)
    except ValueError:
        raise ValidationError({"currency": [f"Unsupported currency: {currency}"]}) from None


def _as_status(status: OrderStatus | str) -> OrderStatus:
    try:
        return OrderStatus(status)
    except ValueError:
        raise ValidationError({"status": [f"Unknown order status: {status}"]}) from None


class OrderManager:
    def __init__(self):
        self._orders: dict[str, Order] = {}
        self._counter = itertools.count(1)
        self._lock = threading.RLock()

    def generate_order_id(self) -> str:
        """Unique within the process: creation time in ms plus a running counter."""
        return f"ORDER-{time.time_ns() // 1_000_000}-{next(self._counter)}"

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def create_order(
        self,
        cart: ShoppingCart,
        currency: Currency | str = Currency.USD,
        tax_rate: float = 0,
    ) -> Order:
        """Snapshot the cart into a new pending order.

        The lines are read once; subtotal and totals are computed from that
        snapshot so they always agree with the order's own lines.
        """
        lines = cart.get_items()
        if not lines:
            raise InvalidStateError({"cart": ["Cannot create order from empty cart"]})
        currency = _as_currency(currency)

        subtotal = round_money(sum(item.line_total for item in lines))
        tax = round_money(subtotal * tax_rate)
        total = round_money(subtotal + tax)

        details = OrderDetails(
            items=tuple(item.model_copy(deep=True) for item in lines),
            subtotal=subtotal,
            tax=tax,
            total=total,
            currency=currency,
        )

        with self._lock:
            order = Order(id=self.generate_order_id(), details=details)
            self._orders[order.id] = order

        logger.info(
            "Order created",
            order_id=order.id,
            line_count=len(details.items),
            total=total,
            currency=currency.value,
        )
        return order

    def confirm_order(self, order_id: str) -> Order:
        return self._transition(order_id, Order.confirm)

    def cancel_order(self, order_id: str) -> Order:
        return self._transition(order_id, Order.cancel)

    def complete_order(self, order_id: str) -> Order:
        return self._transition(order_id, Order.complete)

    def _transition(self, order_id, step) -> Order:
        with self._lock:
            order = self._get_existing(order_id)
            updated = step(order)
            self._orders[order_id] = updated

        logger.info(
            "Order status changed",
            order_id=order_id,
            from_status=order.status.value,
            to_status=updated.status.value,
        )
        return updated

    def _get_existing(self, order_id: str) -> Order:
        order = self._orders.get(order_id)
        if order is None:
            raise NotFoundError({"order_id": [f"Order {order_id} not found"]})
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_order(self, order_id: str) -> Order | None:
        with self._lock:
            return self._orders.get(order_id)

    def get_all_orders(self) -> list[Order]:
        with self._lock:
            return list(self._orders.values())

    def get_orders_by_status(self, status: OrderStatus | str) -> list[Order]:
        status = _as_status(status)
        with self._lock:
            return [order for order in self._orders.values() if order.status == status]

    def get_total_revenue(self) -> float:
        """Sum of totals over completed orders."""
        return sum(order.details.total for order in self.get_orders_by_status(OrderStatus.COMPLETED))

    # -------------------------------------------------------------------
    # Housekeeping
    # -------------------------------------------------------------------
    def delete_order(self, order_id: str) -> bool:
        with self._lock:
            return self._orders.pop(order_id, None) is not None

    def clear_all_orders(self) -> None:
        with self._lock:
            self._orders.clear()
