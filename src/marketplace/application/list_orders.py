"""Application service: List User Orders use case (query)."""

from __future__ import annotations

import math

import structlog

from marketplace.application.dto import PagedOrdersDTO, order_summary_from
from marketplace.application.ownership import resolve_user
from marketplace.application.response import ErrorKind, ServiceResponse
from marketplace.domain.exceptions import DomainException, ValidationError
from marketplace.domain.model.order_status import OrderStatus
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_SIZE = 20


class ListUserOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        user_repo: UserRepository,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._order_repo = order_repo
        self._user_repo = user_repo
        self._default_page_size = default_page_size

    def handle(
        self,
        identity_id: str,
        status: OrderStatus | None = None,
        page_number: int = 1,
        page_size: int | None = None,
    ) -> ServiceResponse[PagedOrdersDTO]:
        if page_size is None:
            page_size = self._default_page_size
        logger.info(
            "Listing orders", identity_id=identity_id, page=page_number, size=page_size
        )
        try:
            if page_number < 1 or page_size < 1:
                raise ValidationError("Page number and page size must be at least 1")
            user = resolve_user(self._user_repo, identity_id)
            orders = self._order_repo.list_by_user(user.id, status)
        except DomainException as exc:
            return ServiceResponse.from_exception(exc)
        except Exception:
            logger.exception("Error listing orders", identity_id=identity_id)
            return ServiceResponse.fail(
                ErrorKind.UNEXPECTED, "An error occurred while retrieving orders"
            )

        start = (page_number - 1) * page_size
        page = orders[start:start + page_size]
        result = PagedOrdersDTO(
            orders=[order_summary_from(o) for o in page],
            total_count=len(orders),
            page_number=page_number,
            page_size=page_size,
            total_pages=math.ceil(len(orders) / page_size),
        )
        return ServiceResponse.ok("Orders retrieved successfully", result)
