"""Shared pytest fixtures."""

from __future__ import annotations

import sys

import pytest
import structlog

from tests.fakes import (
    ALICE,
    BOB,
    FakeOrderRepository,
    FakeSkuRepository,
    FakeUnitOfWork,
    FakeUserRepository,
    make_skus,
)


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Keep structlog uncached so ``capture_logs`` works in every test."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def users() -> FakeUserRepository:
    return FakeUserRepository([ALICE, BOB])


@pytest.fixture
def skus() -> FakeSkuRepository:
    return FakeSkuRepository(make_skus())


@pytest.fixture
def orders() -> FakeOrderRepository:
    return FakeOrderRepository()


@pytest.fixture
def uow(orders, skus, users) -> FakeUnitOfWork:
    return FakeUnitOfWork(orders=orders, skus=skus, users=users)
