"""Application service: Update Payment Status use case.

Records what the payment provider reported for an order.  Payment status
moves independently of the fulfilment status; the only rule is that a
refund needs a collected payment.
"""

from __future__ import annotations

import structlog

from marketplace.application.dto import OrderStatusDTO, order_status_from
from marketplace.application.response import ErrorKind, ServiceResponse
from marketplace.domain.exceptions import DomainException, EntityNotFoundError
from marketplace.domain.model.order_status import PaymentStatus
from marketplace.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdatePaymentStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self, order_id: str, new_status: PaymentStatus
    ) -> ServiceResponse[OrderStatusDTO]:
        log = logger.bind(order_id=order_id, payment_status=new_status.value)
        log.info("Updating payment status")

        try:
            with self._uow as uow:
                order = uow.orders.get_by_id(order_id)
                if order is None:
                    log.warning("Order not found")
                    raise EntityNotFoundError("Order not found")

                order.update_payment_status(new_status)
                uow.orders.save(order)
                uow.commit()
        except DomainException as exc:
            log.warning("Payment status rejected", reason=str(exc))
            return ServiceResponse.from_exception(exc)
        except Exception:
            log.exception("Error updating payment status")
            return ServiceResponse.fail(
                ErrorKind.UNEXPECTED, "An error occurred while updating payment status"
            )

        log.info("Payment status updated")
        return ServiceResponse.ok(
            "Payment status updated successfully", order_status_from(order)
        )
