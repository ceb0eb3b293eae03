"""JSON-file-backed implementation of SkuRepository."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from marketplace.domain.model.sku import Sku
from marketplace.domain.model.value_objects import Money
from marketplace.domain.repository.sku_repository import SkuRepository


class JsonSkuRepository(SkuRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- SkuRepository interface ----------------------------------------------

    def get_by_id(self, sku_id: str) -> Sku | None:
        for raw in self._load_raw():
            if raw["id"] == sku_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Sku]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, sku: Sku) -> None:
        records = self._load_raw()
        replaced = False
        for i, raw in enumerate(records):
            if raw["id"] == sku.id:
                records[i] = self._to_raw(sku)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(sku))
        self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(sku: Sku) -> dict:
        return {
            "id": sku.id,
            "sku_code": sku.sku_code,
            "product_name": sku.product_name,
            "price": str(sku.price.amount),
            "currency": sku.price.currency,
            "stock_quantity": sku.stock_quantity,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Sku:
        return Sku(
            id=raw["id"],
            sku_code=raw["sku_code"],
            product_name=raw["product_name"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            stock_quantity=raw.get("stock_quantity", 0),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
