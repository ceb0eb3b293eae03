"""Abstract repository for Sku aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace.domain.model.sku import Sku


class SkuRepository(ABC):

    @abstractmethod
    def get_by_id(self, sku_id: str) -> Sku | None:
        """Return a SKU by its ID, or None."""

    @abstractmethod
    def list_all(self) -> list[Sku]:
        """Return every SKU."""

    @abstractmethod
    def save(self, sku: Sku) -> None:
        """Persist a new or updated SKU."""
