"""Application service: Update Order Status use case.

Moves an order one step along Pending -> Confirmed -> Processing ->
Shipped -> Delivered.  When the target is SHIPPED and both a tracking
number and a carrier are given, they are attached to the order.
Inventory is not touched on this path, so cancellation is refused here
and left to the Cancel Order use case, which restores stock.
"""

from __future__ import annotations

import structlog

from marketplace.application.dto import OrderStatusDTO, order_status_from
from marketplace.application.response import ErrorKind, ServiceResponse
from marketplace.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InvalidTransitionError,
)
from marketplace.domain.model.order_status import OrderStatus
from marketplace.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


def _present(value: str | None) -> bool:
    return bool(value and value.strip())


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        order_id: str,
        new_status: OrderStatus,
        tracking_number: str | None = None,
        carrier: str | None = None,
    ) -> ServiceResponse[OrderStatusDTO]:
        log = logger.bind(order_id=order_id, new_status=new_status.value)
        log.info("Updating order status")

        try:
            with self._uow as uow:
                order = uow.orders.get_by_id(order_id)
                if order is None:
                    log.warning("Order not found")
                    raise EntityNotFoundError("Order not found")

                if new_status is OrderStatus.CANCELLED:
                    log.warning("Cancellation requested through status update")
                    raise InvalidTransitionError(
                        "Use order cancellation to cancel an order so stock is restored"
                    )

                if not order.status.is_valid_transition(new_status):
                    log.warning(
                        "Invalid status transition", current_status=order.status.value
                    )
                    raise InvalidTransitionError(
                        f"Cannot transition from {order.status.display_name} "
                        f"to {new_status.display_name}"
                    )

                order.update_status(new_status)

                if (
                    new_status is OrderStatus.SHIPPED
                    and _present(tracking_number)
                    and _present(carrier)
                ):
                    order.set_tracking_info(tracking_number, carrier)

                uow.orders.save(order)
                uow.commit()
        except DomainException as exc:
            return ServiceResponse.from_exception(exc)
        except Exception:
            log.exception("Error updating order status")
            return ServiceResponse.fail(
                ErrorKind.UNEXPECTED, "An error occurred while updating order status"
            )

        log.info("Order status updated")
        return ServiceResponse.ok(
            "Order status updated successfully", order_status_from(order)
        )
