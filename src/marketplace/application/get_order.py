"""Application service: Get Order use case (query)."""

from __future__ import annotations

import structlog

from marketplace.application.dto import OrderDetailDTO, order_detail_from
from marketplace.application.ownership import load_owned_order, resolve_user
from marketplace.application.response import ErrorKind, ServiceResponse
from marketplace.domain.exceptions import DomainException
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)


class GetOrderHandler:

    def __init__(self, order_repo: OrderRepository, user_repo: UserRepository) -> None:
        self._order_repo = order_repo
        self._user_repo = user_repo

    def handle(self, order_id: str, identity_id: str) -> ServiceResponse[OrderDetailDTO]:
        logger.info("Getting order", order_id=order_id, identity_id=identity_id)
        try:
            user = resolve_user(self._user_repo, identity_id)
            order = load_owned_order(self._order_repo, order_id, user)
        except DomainException as exc:
            return ServiceResponse.from_exception(exc)
        except Exception:
            logger.exception("Error getting order", order_id=order_id)
            return ServiceResponse.fail(
                ErrorKind.UNEXPECTED, "An error occurred while retrieving order"
            )
        return ServiceResponse.ok("Order retrieved successfully", order_detail_from(order))
