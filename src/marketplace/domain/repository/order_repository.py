"""Abstract repository for Order aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live
elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace.domain.model.order import Order
from marketplace.domain.model.order_status import OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_by_user(
        self, user_id: str, status: OrderStatus | None = None
    ) -> list[Order]:
        """Return a user's orders, newest first, optionally filtered by status."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order (upsert)."""

    @abstractmethod
    def get_by_idempotency_key(self, user_id: str, key: str) -> Order | None:
        """Return the user's order placed with ``key``, if any."""
