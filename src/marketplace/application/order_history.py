"""Application service: Order Status History use case (query).

Builds a customer-facing timeline from the order's recorded status
changes.  The last entry is flagged as the current status.
"""

from __future__ import annotations

import structlog

from marketplace.application.dto import OrderStatusHistoryDTO, StatusHistoryEntryDTO
from marketplace.application.ownership import load_owned_order, resolve_user
from marketplace.application.response import ErrorKind, ServiceResponse
from marketplace.domain.exceptions import DomainException
from marketplace.domain.model.order import Order, StatusChange
from marketplace.domain.model.order_status import OrderStatus
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)

_DESCRIPTIONS = {
    OrderStatus.PENDING: "Order placed successfully",
    OrderStatus.CONFIRMED: "Order confirmed",
    OrderStatus.PROCESSING: "Order is being prepared",
    OrderStatus.SHIPPED: "Order shipped",
    OrderStatus.DELIVERED: "Order delivered successfully",
    OrderStatus.CANCELLED: "Order cancelled",
}


def describe(change: StatusChange, order: Order) -> str:
    text = _DESCRIPTIONS[change.status]
    if change.status is OrderStatus.SHIPPED and order.tracking_number:
        return f"{text} with tracking number {order.tracking_number}"
    if change.status is OrderStatus.CANCELLED and change.note:
        return f"{text}: {change.note}"
    return text


class GetOrderStatusHistoryHandler:

    def __init__(self, order_repo: OrderRepository, user_repo: UserRepository) -> None:
        self._order_repo = order_repo
        self._user_repo = user_repo

    def handle(
        self, order_id: str, identity_id: str
    ) -> ServiceResponse[OrderStatusHistoryDTO]:
        logger.info("Getting status history", order_id=order_id)
        try:
            user = resolve_user(self._user_repo, identity_id)
            order = load_owned_order(self._order_repo, order_id, user)
        except DomainException as exc:
            return ServiceResponse.from_exception(exc)
        except Exception:
            logger.exception("Error getting status history", order_id=order_id)
            return ServiceResponse.fail(
                ErrorKind.UNEXPECTED,
                "An error occurred while retrieving status history",
            )

        last = len(order.status_history) - 1
        history = [
            StatusHistoryEntryDTO(
                status=change.status,
                description=describe(change, order),
                timestamp=change.changed_at,
                is_current=i == last,
            )
            for i, change in enumerate(order.status_history)
        ]
        result = OrderStatusHistoryDTO(
            order_id=order.id,
            order_number=order.order_number,
            current_status=order.status,
            payment_status=order.payment_status,
            history=history,
        )
        return ServiceResponse.ok("Status history retrieved successfully", result)
