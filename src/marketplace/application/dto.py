"""Data transfer objects passed between the application layer and its callers.

DTOs carry data between adapters (CLI, JSON envelope) and the application
layer without exposing domain internals.  The ``*_from`` helpers at the
bottom are the only place aggregates are mapped to DTOs.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime

from marketplace.domain.model.order import Order
from marketplace.domain.model.order_status import OrderStatus, PaymentStatus
from marketplace.domain.model.sku import Sku
from marketplace.domain.model.value_objects import Money, ShippingAddress


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (SKU id + quantity)."""

    sku_id: str
    quantity: int


@dataclass(frozen=True)
class ShippingAddressDTO:
    """Delivery address, both as placement input and in order detail output."""

    first_name: str
    last_name: str
    phone_number: str
    email: str
    address_line1: str
    city: str
    postal_code: str
    country: str
    address_line2: str | None = None
    state: str | None = None

    def to_domain(self) -> ShippingAddress:
        return ShippingAddress(**dataclasses.asdict(self))


@dataclass(frozen=True)
class OrderItemDTO:
    sku_id: str
    sku_code: str
    product_name: str
    quantity: int
    unit_price: str  # decimal string, e.g. "15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDetailDTO:
    """Output: a complete order as shown to its owner."""

    order_id: str
    order_number: str
    status: OrderStatus
    payment_status: PaymentStatus
    is_paid: bool
    items: list[OrderItemDTO]
    currency: str
    subtotal: str
    shipping_cost: str
    discount_amount: str
    total: str
    promo_code: str | None
    tracking_number: str | None
    shipping_carrier: str | None
    cancellation_reason: str | None
    shipping_address: ShippingAddressDTO | None
    delivery_method: str
    payment_method: str
    customer_notes: str | None
    created_at: datetime
    shipped_at: datetime | None
    delivered_at: datetime | None
    cancelled_at: datetime | None
    allowed_next_statuses: list[OrderStatus]


@dataclass(frozen=True)
class OrderStatusDTO:
    """Output of a status update."""

    order_id: str
    order_number: str
    status: OrderStatus
    payment_status: PaymentStatus
    shipped_at: datetime | None
    delivered_at: datetime | None
    tracking_number: str | None
    shipping_carrier: str | None


@dataclass(frozen=True)
class OrderSummaryDTO:
    order_id: str
    order_number: str
    status: OrderStatus
    payment_status: PaymentStatus
    total: str
    currency: str
    total_items: int
    created_at: datetime
    tracking_number: str | None
    shipping_carrier: str | None


@dataclass(frozen=True)
class PagedOrdersDTO:
    orders: list[OrderSummaryDTO]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int


@dataclass(frozen=True)
class StatusHistoryEntryDTO:
    status: OrderStatus
    description: str
    timestamp: datetime
    is_current: bool


@dataclass(frozen=True)
class OrderStatusHistoryDTO:
    order_id: str
    order_number: str
    current_status: OrderStatus
    payment_status: PaymentStatus
    history: list[StatusHistoryEntryDTO]


@dataclass(frozen=True)
class SkuDTO:
    sku_id: str
    sku_code: str
    product_name: str
    price: str
    currency: str
    stock_quantity: int


# --- Mapping ------------------------------------------------------------------


def _amount(money: Money) -> str:
    return str(money.amount)


def order_detail_from(order: Order) -> OrderDetailDTO:
    return OrderDetailDTO(
        order_id=order.id,
        order_number=order.order_number,
        status=order.status,
        payment_status=order.payment_status,
        is_paid=order.payment_status.is_paid(),
        currency=order.currency,
        items=[
            OrderItemDTO(
                sku_id=item.sku_id,
                sku_code=item.sku_code,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=_amount(item.unit_price),
                line_total=_amount(item.line_total),
            )
            for item in order.items
        ],
        subtotal=_amount(order.subtotal),
        shipping_cost=_amount(order.shipping_cost),
        discount_amount=_amount(order.discount_amount),
        total=_amount(order.total),
        promo_code=order.promo_code,
        tracking_number=order.tracking_number,
        shipping_carrier=order.shipping_carrier,
        cancellation_reason=order.cancellation_reason,
        shipping_address=(
            ShippingAddressDTO(**dataclasses.asdict(order.shipping_address))
            if order.shipping_address
            else None
        ),
        delivery_method=order.delivery_method,
        payment_method=order.payment_method,
        customer_notes=order.customer_notes,
        created_at=order.created_at,
        shipped_at=order.shipped_at,
        delivered_at=order.delivered_at,
        cancelled_at=order.cancelled_at,
        allowed_next_statuses=sorted(
            order.status.valid_next_statuses(), key=lambda s: s.value
        ),
    )


def order_status_from(order: Order) -> OrderStatusDTO:
    return OrderStatusDTO(
        order_id=order.id,
        order_number=order.order_number,
        status=order.status,
        payment_status=order.payment_status,
        shipped_at=order.shipped_at,
        delivered_at=order.delivered_at,
        tracking_number=order.tracking_number,
        shipping_carrier=order.shipping_carrier,
    )


def order_summary_from(order: Order) -> OrderSummaryDTO:
    return OrderSummaryDTO(
        order_id=order.id,
        order_number=order.order_number,
        status=order.status,
        payment_status=order.payment_status,
        total=_amount(order.total),
        currency=order.currency,
        total_items=order.total_items,
        created_at=order.created_at,
        tracking_number=order.tracking_number,
        shipping_carrier=order.shipping_carrier,
    )


def sku_from(sku: Sku) -> SkuDTO:
    return SkuDTO(
        sku_id=sku.id,
        sku_code=sku.sku_code,
        product_name=sku.product_name,
        price=_amount(sku.price),
        currency=sku.price.currency,
        stock_quantity=sku.stock_quantity,
    )
