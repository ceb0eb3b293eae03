"""Composition root: builds the JSON repositories and unit of work from settings.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from marketplace.infrastructure.config import Settings
from marketplace.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from marketplace.infrastructure.persistence.json_sku_repository import (
    JsonSkuRepository,
)
from marketplace.infrastructure.persistence.json_unit_of_work import (
    ORDERS_FILE,
    SKUS_FILE,
    USERS_FILE,
    JsonUnitOfWork,
)
from marketplace.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir / ORDERS_FILE)


def sku_repository(settings: Settings) -> JsonSkuRepository:
    return JsonSkuRepository(settings.data_dir / SKUS_FILE)


def user_repository(settings: Settings) -> JsonUserRepository:
    return JsonUserRepository(settings.data_dir / USERS_FILE)


def unit_of_work(settings: Settings) -> JsonUnitOfWork:
    return JsonUnitOfWork(settings.data_dir)
