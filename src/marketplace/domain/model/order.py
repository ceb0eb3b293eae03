"""Order aggregate: line items, status transitions and totals.

The Order is an aggregate root that owns its line items.  Status changes
go through ``cancel()`` and ``update_status()`` only; both consult the
``OrderStatus`` transition table and stamp the matching timestamp.
Payment status moves independently via ``update_payment_status()``.
"""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from marketplace.domain.exceptions import (
    InvalidStateError,
    InvalidTransitionError,
    ValidationError,
)
from marketplace.domain.model.order_status import OrderStatus, PaymentStatus
from marketplace.domain.model.value_objects import Money, Quantity, ShippingAddress

DEFAULT_DELIVERY_METHOD = "standard"
DEFAULT_PAYMENT_METHOD = "card"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _blank_to_none(value: str | None) -> str | None:
    return value.strip() if value and value.strip() else None


def generate_order_number(now: datetime | None = None) -> str:
    """Build a customer-facing reference like ``ORD-20260119-48213``."""
    now = now or _utcnow()
    return f"ORD-{now:%Y%m%d}-{random.randint(10000, 99999)}"


@dataclass(frozen=True)
class OrderItem:
    """Captures the SKU details at purchase time.

    Name, code and ``unit_price`` are snapshots; later catalog edits
    never reach an existing order.
    """

    sku_id: str
    sku_code: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at placement time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class StatusChange:
    status: OrderStatus
    changed_at: datetime
    note: str | None = None


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.place()`` for new orders.  The ``__init__`` stays plain so
    repositories can reconstitute persisted orders without re-validating.
    """

    id: str
    user_id: str
    order_number: str
    items: list[OrderItem]
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    shipping_cost: Money = field(default_factory=Money.zero)
    discount_amount: Money = field(default_factory=Money.zero)
    promo_code: str | None = None
    tracking_number: str | None = None
    shipping_carrier: str | None = None
    cancellation_reason: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None
    status_history: list[StatusChange] = field(default_factory=list)
    shipping_address: ShippingAddress | None = None
    delivery_method: str = DEFAULT_DELIVERY_METHOD
    payment_method: str = DEFAULT_PAYMENT_METHOD
    customer_notes: str | None = None
    idempotency_key: str | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        user_id: str,
        items: list[OrderItem],
        shipping_cost: Money | None = None,
        discount_amount: Money | None = None,
        promo_code: str | None = None,
        shipping_address: ShippingAddress | None = None,
        delivery_method: str = DEFAULT_DELIVERY_METHOD,
        payment_method: str = DEFAULT_PAYMENT_METHOD,
        customer_notes: str | None = None,
        idempotency_key: str | None = None,
    ) -> Order:
        """Create a new pending order, enforcing all invariants.

        ``shipping_address`` may be omitted for orders that are collected
        or delivered digitally.  Blank notes and idempotency keys count as
        absent.
        """
        if not user_id:
            raise ValidationError("User is required")
        if not items:
            raise ValidationError("Order must contain at least one item")
        if promo_code is not None and not promo_code.strip():
            raise ValidationError("Promo code cannot be empty")
        if not delivery_method or not delivery_method.strip():
            raise ValidationError("Delivery method is required")
        if not payment_method or not payment_method.strip():
            raise ValidationError("Payment method is required")

        currency = items[0].unit_price.currency
        now = _utcnow()
        order = Order(
            id=str(uuid.uuid4()),
            user_id=user_id,
            order_number=generate_order_number(now),
            items=list(items),
            shipping_cost=shipping_cost or Money.zero(currency),
            discount_amount=discount_amount or Money.zero(currency),
            promo_code=promo_code.strip() if promo_code else None,
            created_at=now,
            shipping_address=shipping_address,
            delivery_method=delivery_method.strip(),
            payment_method=payment_method.strip(),
            customer_notes=_blank_to_none(customer_notes),
            idempotency_key=_blank_to_none(idempotency_key),
        )
        order.status_history.append(StatusChange(OrderStatus.PENDING, now))
        return order

    # --- State transitions ----------------------------------------------------

    def cancel(self, reason: str | None = None) -> None:
        """Transition PENDING|CONFIRMED|PROCESSING -> CANCELLED.

        Stock restoration is the caller's job and must be persisted in
        the same unit of work.
        """
        if not self.status.can_cancel():
            raise InvalidStateError(
                f"Order with status '{self.status.display_name}' cannot be cancelled"
            )
        now = _utcnow()
        self.status = OrderStatus.CANCELLED
        self.cancelled_at = now
        self.cancellation_reason = reason.strip() if reason else None
        self.updated_at = now
        self.status_history.append(
            StatusChange(OrderStatus.CANCELLED, now, self.cancellation_reason)
        )

    def update_status(self, target: OrderStatus) -> None:
        """Advance along the fulfilment path.

        The timestamp stamped is decided by ``target``: SHIPPED sets
        ``shipped_at``, DELIVERED sets ``delivered_at``.
        """
        if not self.status.is_valid_transition(target):
            raise InvalidTransitionError(
                f"Cannot transition from {self.status.display_name} "
                f"to {target.display_name}"
            )
        if target is OrderStatus.CANCELLED:
            self.cancel()
            return

        now = _utcnow()
        self.status = target
        if target is OrderStatus.SHIPPED:
            self.shipped_at = now
        elif target is OrderStatus.DELIVERED:
            self.delivered_at = now
        self.updated_at = now
        self.status_history.append(StatusChange(target, now))

    def update_payment_status(self, target: PaymentStatus) -> None:
        """Record a payment event reported by the payment provider.

        Refunds are only accepted for a payment that was collected.
        """
        refunding = target in (PaymentStatus.REFUNDED, PaymentStatus.PARTIALLY_REFUNDED)
        if refunding and not self.payment_status.can_refund():
            raise InvalidTransitionError(
                f"Cannot refund a payment with status {self.payment_status.display_name}"
            )
        self.payment_status = target
        self.updated_at = _utcnow()

    def set_tracking_info(self, tracking_number: str, carrier: str) -> None:
        if not tracking_number or not tracking_number.strip():
            raise ValidationError("Tracking number is required")
        if not carrier or not carrier.strip():
            raise ValidationError("Carrier is required")
        self.tracking_number = tracking_number.strip()
        self.shipping_carrier = carrier.strip()
        self.updated_at = _utcnow()

    # --- Computed properties --------------------------------------------------

    @property
    def currency(self) -> str:
        return self.items[0].unit_price.currency if self.items else "USD"

    @property
    def subtotal(self) -> Money:
        result = Money.zero(self.currency)
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def total(self) -> Money:
        """subtotal + shipping - discount, never below zero."""
        return (self.subtotal + self.shipping_cost).subtract_floor_zero(
            self.discount_amount
        )

    @property
    def total_items(self) -> int:
        return sum(item.quantity.value for item in self.items)
