"""Application service: Cancel Order use case.

Cancels a customer's own order and puts every ordered unit back on its
SKU.  Stock restoration is best-effort per line: a SKU that no longer
exists is logged and skipped, it does not block the cancellation.  The
order and all touched SKUs are committed together or not at all.
"""

from __future__ import annotations

import structlog

from marketplace.application.ownership import load_owned_order, resolve_user
from marketplace.application.response import ErrorKind, ServiceResponse
from marketplace.domain.exceptions import DomainException, InvalidStateError
from marketplace.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        order_id: str,
        identity_id: str,
        reason: str | None = None,
    ) -> ServiceResponse[bool]:
        log = logger.bind(order_id=order_id, identity_id=identity_id)
        log.info("Cancelling order")

        try:
            with self._uow as uow:
                user = resolve_user(uow.users, identity_id)
                order = load_owned_order(uow.orders, order_id, user)

                if not order.status.can_cancel():
                    log.warning("Order cannot be cancelled", status=order.status.value)
                    raise InvalidStateError(
                        f"Order with status '{order.status.display_name}' "
                        f"cannot be cancelled"
                    )

                for item in order.items:
                    sku = uow.skus.get_by_id(item.sku_id)
                    if sku is None:
                        log.warning(
                            "SKU missing, stock not restored",
                            sku_id=item.sku_id,
                            quantity=item.quantity.value,
                        )
                        continue
                    sku.restore_stock(item.quantity.value)
                    uow.skus.save(sku)
                    log.info(
                        "Restored stock",
                        sku_id=item.sku_id,
                        quantity=item.quantity.value,
                    )

                order.cancel(reason)
                uow.orders.save(order)
                uow.commit()
        except DomainException as exc:
            return ServiceResponse.from_exception(exc)
        except Exception:
            log.exception("Error cancelling order")
            return ServiceResponse.fail(
                ErrorKind.UNEXPECTED, "An error occurred while cancelling order"
            )

        log.info("Order cancelled")
        return ServiceResponse.ok("Order cancelled successfully", True)
