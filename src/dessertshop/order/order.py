"""Order records and the order status state machine.

State Machine:
    PENDING → CONFIRMED → COMPLETED
    CANCELLED (from PENDING, CONFIRMED)

COMPLETED and CANCELLED are terminal. Orders are immutable: a transition
returns a new ``Order`` with the same id.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from dessertshop.cart.items import CartItem
from dessertshop.errors import InvalidTransitionError
from dessertshop.shared.money import Currency


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


class OrderDetails(BaseModel):
    """Lines and pricing captured when the order was placed.

    Prices are locked at checkout: later changes to the cart or the
    catalogue never reach an existing order.
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[CartItem, ...]
    subtotal: float = Field(ge=0)
    tax: float
    total: float
    currency: Currency = Currency.USD


class Order(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    details: OrderDetails
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    confirmed_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return not _VALID_TRANSITIONS[self.status]

    def can_transition_to(self, target_status: OrderStatus) -> bool:
        return target_status in _VALID_TRANSITIONS[self.status]

    def assert_can_transition(self, target_status: OrderStatus) -> None:
        """Validate that the current state allows transition to target."""
        if not self.can_transition_to(target_status):
            raise InvalidTransitionError(
                {"status": [f"Cannot transition order {self.id} from {self.status.value} to {target_status.value}"]}
            )

    def confirm(self) -> "Order":
        self.assert_can_transition(OrderStatus.CONFIRMED)
        return self.model_copy(update={"status": OrderStatus.CONFIRMED, "confirmed_at": datetime.now(UTC)})

    def complete(self) -> "Order":
        self.assert_can_transition(OrderStatus.COMPLETED)
        return self.model_copy(update={"status": OrderStatus.COMPLETED})

    def cancel(self) -> "Order":
        self.assert_can_transition(OrderStatus.CANCELLED)
        return self.model_copy(update={"status": OrderStatus.CANCELLED})
