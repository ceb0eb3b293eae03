"""Abstract unit of work, the transaction handle handed to handlers.

Usage::

    with uow:
        order = uow.orders.get_by_id(order_id)
        ...
        uow.orders.save(order)
        uow.commit()

Leaving the block without ``commit()`` (including by an exception) rolls
back every repository write made inside it.

Handlers keep one instance for their lifetime, so an implementation that
may be used from several threads must make ``begin()`` wait until the
previous transaction on the instance has ended.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.sku_repository import SkuRepository
from marketplace.domain.repository.user_repository import UserRepository


class UnitOfWork(ABC):

    orders: OrderRepository
    skus: SkuRepository
    users: UserRepository

    def __enter__(self) -> UnitOfWork:
        # begin() may block until another holder of this instance is done,
        # so the flag is only reset once the transaction is ours.
        self.begin()
        self._committed = False
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        try:
            if not self._committed:
                self.rollback()
        finally:
            self.end()

    def commit(self) -> None:
        self._commit()
        self._committed = True

    @abstractmethod
    def begin(self) -> None:
        """Open the transaction."""

    @abstractmethod
    def _commit(self) -> None:
        """Make every write since ``begin()`` durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every write since ``begin()``."""

    def end(self) -> None:
        """Release whatever ``begin()`` acquired.  Called on every exit."""
