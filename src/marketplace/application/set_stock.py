"""Application service: Set SKU Stock use case."""

from __future__ import annotations

import structlog

from marketplace.application.dto import SkuDTO, sku_from
from marketplace.application.response import ErrorKind, ServiceResponse
from marketplace.domain.exceptions import DomainException, EntityNotFoundError
from marketplace.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class SetSkuStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, sku_id: str, quantity: int) -> ServiceResponse[SkuDTO]:
        """Overwrite the on-hand stock for a SKU."""
        log = logger.bind(sku_id=sku_id)
        try:
            with self._uow as uow:
                sku = uow.skus.get_by_id(sku_id)
                if sku is None:
                    raise EntityNotFoundError(f"SKU '{sku_id}' not found")
                previous = sku.stock_quantity
                sku.update_stock(quantity)
                uow.skus.save(sku)
                uow.commit()
        except DomainException as exc:
            return ServiceResponse.from_exception(exc)
        except Exception:
            log.exception("Error updating stock")
            return ServiceResponse.fail(
                ErrorKind.UNEXPECTED, "An error occurred while updating stock"
            )

        log.info("Stock updated", previous=previous, quantity=quantity)
        return ServiceResponse.ok("Stock updated successfully", sku_from(sku))
