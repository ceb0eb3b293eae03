"""Identity resolution and owner-scoped order loading.

Shared by every handler that acts on behalf of a customer.  A missing
order and an order owned by someone else raise the same
``EntityNotFoundError("Order not found")`` so callers cannot discover
other users' order ids.
"""

from __future__ import annotations

import structlog

from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.model.order import Order
from marketplace.domain.model.user import User
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)


def resolve_user(users: UserRepository, identity_id: str) -> User:
    user = users.get_by_identity_id(identity_id)
    if user is None:
        logger.warning("Domain user for identity not found", identity_id=identity_id)
        raise EntityNotFoundError("User not found")
    return user


def load_owned_order(orders: OrderRepository, order_id: str, user: User) -> Order:
    order = orders.get_by_id(order_id)
    if order is None:
        logger.warning("Order not found", order_id=order_id)
        raise EntityNotFoundError("Order not found")
    if order.user_id != user.id:
        logger.warning(
            "Order does not belong to user", order_id=order_id, user_id=user.id
        )
        raise EntityNotFoundError("Order not found")
    return order
