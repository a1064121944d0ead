"""Shopping cart: an in-memory, observable collection of cart lines.

The cart holds one ``CartItem`` per dessert id. Every mutation is committed
first and then announced to subscribers synchronously, before the mutating
call returns, so a subscriber that re-queries the cart sees the new state.
A subscriber that raises is logged and skipped; it cannot block delivery to
the others or undo the mutation.
"""

import threading
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

import structlog

from dessertshop.cart.events import (
    CartCleared,
    CartEvent,
    CartLoaded,
    ItemAdded,
    ItemRemoved,
    QuantityUpdated,
)
from dessertshop.cart.items import CartItem, ensure_whole_quantity
from dessertshop.catalogue.dessert import Dessert
from dessertshop.errors import NotFoundError, ValidationError
from dessertshop.shared.money import round_money

logger = structlog.get_logger(__name__)

CartEventCallback = Callable[[CartEvent], None]


class ShoppingCart:
    def __init__(self):
        self._items: dict[str, CartItem] = {}
        self._subscribers: list[CartEventCallback] = []
        self._lock = threading.RLock()

    # -------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------
    def subscribe(self, callback: CartEventCallback) -> Callable[[], None]:
        """Register ``callback`` for cart events and return an unsubscribe function.

        Subscribing the same callback twice still delivers each event once.
        """
        with self._lock:
            if callback not in self._subscribers:
                self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _emit(self, event: CartEvent) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception("Cart event subscriber failed", event_type=event.type.value)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, dessert: Dessert, quantity: int = 1) -> None:
        """Add ``quantity`` of a dessert, merging into an existing line."""
        ensure_whole_quantity(quantity)
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be greater than 0"]})
        if not dessert.in_stock:
            raise ValidationError({"dessert": [f"Dessert {dessert.id} is not in stock"]})

        with self._lock:
            existing = self._items.get(dessert.id)
            if existing is not None:
                item = existing.model_copy(update={"quantity": existing.quantity + quantity})
            else:
                item = CartItem(dessert=dessert, quantity=quantity, added_at=datetime.now(UTC))
            self._items[dessert.id] = item

            logger.debug("Added dessert to cart", dessert_id=dessert.id, quantity=item.quantity)
            self._emit(ItemAdded(item=item))

    def remove_item(self, dessert_id: str) -> None:
        """Remove a line. Removing an absent dessert is a no-op."""
        with self._lock:
            if dessert_id not in self._items:
                return
            del self._items[dessert_id]

            logger.debug("Removed dessert from cart", dessert_id=dessert_id)
            self._emit(ItemRemoved(dessert_id=dessert_id))

    def update_quantity(self, dessert_id: str, quantity: int) -> None:
        """Set the quantity of a line; zero removes it."""
        ensure_whole_quantity(quantity)
        if quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})

        with self._lock:
            if quantity == 0:
                self.remove_item(dessert_id)
                return

            item = self._items.get(dessert_id)
            if item is None:
                raise NotFoundError({"dessert_id": [f"Item {dessert_id} not found in cart"]})

            self._items[dessert_id] = item.model_copy(update={"quantity": quantity})

            logger.debug("Updated cart quantity", dessert_id=dessert_id, quantity=quantity)
            self._emit(QuantityUpdated(dessert_id=dessert_id, quantity=quantity))

    def increment_quantity(self, dessert_id: str) -> None:
        with self._lock:
            item = self._get_existing(dessert_id)
            self.update_quantity(dessert_id, item.quantity + 1)

    def decrement_quantity(self, dessert_id: str) -> None:
        with self._lock:
            item = self._get_existing(dessert_id)
            self.update_quantity(dessert_id, max(0, item.quantity - 1))

    def clear(self) -> None:
        """Remove every line. Always notifies, even if the cart was already empty."""
        with self._lock:
            self._items.clear()
            self._emit(CartCleared())

    def load_items(self, items: Iterable[CartItem]) -> None:
        """Replace the cart contents, e.g. with lines restored from storage.

        Lines are keyed by dessert id; a later line wins over an earlier one
        with the same id.
        """
        items = tuple(items)
        with self._lock:
            self._items = {item.dessert.id: item for item in items}

            logger.debug("Loaded cart", line_count=len(self._items))
            self._emit(CartLoaded(items=items))

    def _get_existing(self, dessert_id: str) -> CartItem:
        item = self._items.get(dessert_id)
        if item is None:
            raise NotFoundError({"dessert_id": [f"Item {dessert_id} not found in cart"]})
        return item

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    def get_subtotal(self) -> float:
        with self._lock:
            return round_money(sum(item.line_total for item in self._items.values()))

    def get_total(self, tax_rate: float = 0) -> float:
        """Subtotal plus tax at ``tax_rate``, rounded once after summing."""
        subtotal = self.get_subtotal()
        return round_money(subtotal + subtotal * tax_rate)

    def get_item_count(self) -> int:
        """Total number of desserts in the cart, counting quantities."""
        with self._lock:
            return sum(item.quantity for item in self._items.values())

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._items

    def has_item(self, dessert_id: str) -> bool:
        with self._lock:
            return dessert_id in self._items

    def get_item(self, dessert_id: str) -> CartItem | None:
        with self._lock:
            return self._items.get(dessert_id)

    def get_items(self) -> list[CartItem]:
        with self._lock:
            return list(self._items.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
