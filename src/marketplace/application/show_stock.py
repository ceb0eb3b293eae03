"""Application service: Show Stock use case (query)."""

from __future__ import annotations

from marketplace.application.dto import SkuDTO, sku_from
from marketplace.domain.repository.sku_repository import SkuRepository


class ShowStockHandler:

    def __init__(self, sku_repo: SkuRepository) -> None:
        self._sku_repo = sku_repo

    def handle(self) -> list[SkuDTO]:
        return [sku_from(sku) for sku in self._sku_repo.list_all()]
