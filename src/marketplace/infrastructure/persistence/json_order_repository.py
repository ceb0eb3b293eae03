"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import dataclasses
import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from marketplace.domain.model.order import (
    DEFAULT_DELIVERY_METHOD,
    DEFAULT_PAYMENT_METHOD,
    Order,
    OrderItem,
    StatusChange,
)
from marketplace.domain.model.order_status import OrderStatus, PaymentStatus
from marketplace.domain.model.value_objects import Money, Quantity, ShippingAddress
from marketplace.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_by_user(
        self, user_id: str, status: OrderStatus | None = None
    ) -> list[Order]:
        orders = [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["user_id"] == user_id
            and (status is None or raw["status"] == status.value)
        ]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def get_by_idempotency_key(self, user_id: str, key: str) -> Order | None:
        for raw in self._load_raw():
            if raw["user_id"] == user_id and raw.get("idempotency_key") == key:
                return self._to_domain(raw)
        return None

    def save(self, order: Order) -> None:
        orders = self._load_raw()

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                replaced = True
                break
        if not replaced:
            orders.append(self._to_raw(order))

        self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "order_number": order.order_number,
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "currency": order.shipping_cost.currency,
            "shipping_cost": str(order.shipping_cost.amount),
            "discount_amount": str(order.discount_amount.amount),
            "promo_code": order.promo_code,
            "tracking_number": order.tracking_number,
            "shipping_carrier": order.shipping_carrier,
            "cancellation_reason": order.cancellation_reason,
            "created_at": order.created_at.isoformat(),
            "updated_at": _iso(order.updated_at),
            "shipped_at": _iso(order.shipped_at),
            "delivered_at": _iso(order.delivered_at),
            "cancelled_at": _iso(order.cancelled_at),
            "shipping_address": (
                dataclasses.asdict(order.shipping_address)
                if order.shipping_address
                else None
            ),
            "delivery_method": order.delivery_method,
            "payment_method": order.payment_method,
            "customer_notes": order.customer_notes,
            "idempotency_key": order.idempotency_key,
            "items": [
                {
                    "sku_id": item.sku_id,
                    "sku_code": item.sku_code,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
            "status_history": [
                {
                    "status": change.status.value,
                    "changed_at": change.changed_at.isoformat(),
                    "note": change.note,
                }
                for change in order.status_history
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        items = [
            OrderItem(
                sku_id=i["sku_id"],
                sku_code=i["sku_code"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        ]
        history = [
            StatusChange(
                status=OrderStatus(h["status"]),
                changed_at=datetime.fromisoformat(h["changed_at"]),
                note=h.get("note"),
            )
            for h in raw.get("status_history", [])
        ]
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            order_number=raw["order_number"],
            items=items,
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw.get("payment_status", "PENDING")),
            shipping_cost=Money(Decimal(raw.get("shipping_cost", "0")), currency),
            discount_amount=Money(Decimal(raw.get("discount_amount", "0")), currency),
            promo_code=raw.get("promo_code"),
            tracking_number=raw.get("tracking_number"),
            shipping_carrier=raw.get("shipping_carrier"),
            cancellation_reason=raw.get("cancellation_reason"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=_parse(raw.get("updated_at")),
            shipped_at=_parse(raw.get("shipped_at")),
            delivered_at=_parse(raw.get("delivered_at")),
            cancelled_at=_parse(raw.get("cancelled_at")),
            status_history=history,
            shipping_address=(
                ShippingAddress(**raw["shipping_address"])
                if raw.get("shipping_address")
                else None
            ),
            delivery_method=raw.get("delivery_method", DEFAULT_DELIVERY_METHOD),
            payment_method=raw.get("payment_method", DEFAULT_PAYMENT_METHOD),
            customer_notes=raw.get("customer_notes"),
            idempotency_key=raw.get("idempotency_key"),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
