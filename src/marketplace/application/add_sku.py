"""Application service: Add SKU use case."""

from __future__ import annotations

import structlog

from marketplace.application.dto import SkuDTO, sku_from
from marketplace.application.response import ErrorKind, ServiceResponse
from marketplace.domain.exceptions import DomainException, ValidationError
from marketplace.domain.model.sku import Sku
from marketplace.domain.model.value_objects import Money
from marketplace.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddSkuHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        sku_code: str,
        product_name: str,
        price: str,
        stock_quantity: int = 0,
        currency: str = "USD",
    ) -> ServiceResponse[SkuDTO]:
        """Add a new SKU to the catalog.

        The duplicate check and id assignment run inside the transaction,
        so two concurrent adds cannot claim the same code or id.
        """
        try:
            if not sku_code or not sku_code.strip():
                raise ValidationError("SKU code is required")
            if not product_name or not product_name.strip():
                raise ValidationError("Product name is required")

            with self._uow as uow:
                all_skus = uow.skus.list_all()
                if any(s.sku_code.lower() == sku_code.strip().lower() for s in all_skus):
                    raise ValidationError(f"SKU '{sku_code}' already exists")

                # Auto-assign the next numeric id
                numeric_ids = [int(s.id) for s in all_skus if s.id.isdigit()]
                next_id = str(max(numeric_ids, default=0) + 1)

                sku = Sku(
                    id=next_id,
                    sku_code=sku_code.strip(),
                    product_name=product_name.strip(),
                    price=Money.of(price, currency),
                    stock_quantity=stock_quantity,
                )
                uow.skus.save(sku)
                uow.commit()
        except DomainException as exc:
            return ServiceResponse.from_exception(exc)
        except Exception:
            logger.exception("Error adding SKU", sku_code=sku_code)
            return ServiceResponse.fail(
                ErrorKind.UNEXPECTED, "An error occurred while adding SKU"
            )

        logger.info("SKU added", sku_id=sku.id, sku_code=sku.sku_code)
        return ServiceResponse.ok("SKU added successfully", sku_from(sku))
