"""Order and payment status enums.

``OrderStatus`` carries the order lifecycle state machine: a static table
of allowed transitions plus the pure queries built on it.  Nothing here
touches an aggregate; ``Order`` calls these to guard its own mutations.
"""

from __future__ import annotations

from enum import Enum


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def display_name(self) -> str:
        """Human-readable label used in user-facing messages."""
        return _ORDER_DISPLAY_NAMES[self]

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self]

    def valid_next_statuses(self) -> frozenset[OrderStatus]:
        """Statuses reachable in a single step; empty for terminal states."""
        return _TRANSITIONS[self]

    def is_valid_transition(self, target: OrderStatus) -> bool:
        return target in _TRANSITIONS[self]

    def can_cancel(self) -> bool:
        return self in _CANCELLABLE

    def can_update_status(self) -> bool:
        return not self.is_terminal


_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

_CANCELLABLE = frozenset(
    {OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PROCESSING}
)

_ORDER_DISPLAY_NAMES = {
    OrderStatus.PENDING: "Pending",
    OrderStatus.CONFIRMED: "Confirmed",
    OrderStatus.PROCESSING: "Processing",
    OrderStatus.SHIPPED: "Shipped",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.CANCELLED: "Cancelled",
}


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"
    PARTIALLY_REFUNDED = "PARTIALLY_REFUNDED"

    @property
    def display_name(self) -> str:
        return _PAYMENT_DISPLAY_NAMES[self]

    def is_paid(self) -> bool:
        """True once money has been collected, even if later refunded."""
        return self in (
            PaymentStatus.PAID,
            PaymentStatus.REFUNDED,
            PaymentStatus.PARTIALLY_REFUNDED,
        )

    def can_refund(self) -> bool:
        return self in (PaymentStatus.PAID, PaymentStatus.PARTIALLY_REFUNDED)


_PAYMENT_DISPLAY_NAMES = {
    PaymentStatus.PENDING: "Pending",
    PaymentStatus.PROCESSING: "Processing",
    PaymentStatus.PAID: "Paid",
    PaymentStatus.FAILED: "Failed",
    PaymentStatus.REFUNDED: "Refunded",
    PaymentStatus.PARTIALLY_REFUNDED: "Partially Refunded",
}
