"""In-memory fake repositories and unit of work for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict.  They store and hand out deep copies, so
a mutation that is never saved is invisible to later reads, just like
with a real store.
"""

from __future__ import annotations

import copy

from marketplace.domain.model.order import Order, OrderItem
from marketplace.domain.model.order_status import OrderStatus
from marketplace.domain.model.sku import Sku
from marketplace.domain.model.user import User
from marketplace.domain.model.value_objects import Money, Quantity
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.sku_repository import SkuRepository
from marketplace.domain.repository.unit_of_work import UnitOfWork
from marketplace.domain.repository.user_repository import UserRepository


class FakeOrderRepository(OrderRepository):

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._store: dict[str, Order] = {}
        for o in orders or []:
            self._store[o.id] = copy.deepcopy(o)

    def get_by_id(self, order_id: str) -> Order | None:
        return copy.deepcopy(self._store.get(order_id))

    def list_by_user(
        self, user_id: str, status: OrderStatus | None = None
    ) -> list[Order]:
        orders = [
            copy.deepcopy(o)
            for o in self._store.values()
            if o.user_id == user_id and (status is None or o.status is status)
        ]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def get_by_idempotency_key(self, user_id: str, key: str) -> Order | None:
        for o in self._store.values():
            if o.user_id == user_id and o.idempotency_key == key:
                return copy.deepcopy(o)
        return None

    def save(self, order: Order) -> None:
        self._store[order.id] = copy.deepcopy(order)


class FakeSkuRepository(SkuRepository):

    def __init__(self, skus: list[Sku] | None = None) -> None:
        self._store: dict[str, Sku] = {}
        for s in skus or []:
            self._store[s.id] = copy.deepcopy(s)

    def get_by_id(self, sku_id: str) -> Sku | None:
        return copy.deepcopy(self._store.get(sku_id))

    def list_all(self) -> list[Sku]:
        return [copy.deepcopy(s) for s in self._store.values()]

    def save(self, sku: Sku) -> None:
        self._store[sku.id] = copy.deepcopy(sku)


class FakeUserRepository(UserRepository):

    def __init__(self, users: list[User] | None = None) -> None:
        self._store: dict[str, User] = {}
        for u in users or []:
            self._store[u.id] = u

    def get_by_identity_id(self, identity_id: str) -> User | None:
        for u in self._store.values():
            if u.identity_id == identity_id:
                return u
        return None

    def list_all(self) -> list[User]:
        return list(self._store.values())

    def save(self, user: User) -> None:
        self._store[user.id] = user


class FakeUnitOfWork(UnitOfWork):
    """Snapshots every store on ``begin()`` and restores it on rollback."""

    def __init__(
        self,
        orders: FakeOrderRepository | None = None,
        skus: FakeSkuRepository | None = None,
        users: FakeUserRepository | None = None,
    ) -> None:
        self.orders = orders or FakeOrderRepository()
        self.skus = skus or FakeSkuRepository()
        self.users = users or FakeUserRepository()
        self.committed = False
        self.rolled_back = False
        self._snapshot: tuple | None = None

    def begin(self) -> None:
        self._snapshot = (
            copy.deepcopy(self.orders._store),
            copy.deepcopy(self.skus._store),
            copy.deepcopy(self.users._store),
        )

    def _commit(self) -> None:
        self.committed = True
        self._snapshot = None

    def rollback(self) -> None:
        if self._snapshot is None:
            return
        self.orders._store, self.skus._store, self.users._store = self._snapshot
        self._snapshot = None
        self.rolled_back = True


class ExplodingSkuRepository(FakeSkuRepository):
    """Fails on the N-th save to simulate a storage error mid-transaction."""

    def __init__(self, skus: list[Sku] | None = None, fail_on: int = 1) -> None:
        super().__init__(skus)
        self._saves = 0
        self._fail_on = fail_on

    def save(self, sku: Sku) -> None:
        self._saves += 1
        if self._saves == self._fail_on:
            raise OSError("disk full")
        super().save(sku)


class ExplodingOrderRepository(FakeOrderRepository):
    """Fails on the N-th save, after any SKU writes of the same transaction."""

    def __init__(self, orders: list[Order] | None = None, fail_on: int = 1) -> None:
        super().__init__(orders)
        self._saves = 0
        self._fail_on = fail_on

    def save(self, order: Order) -> None:
        self._saves += 1
        if self._saves == self._fail_on:
            raise OSError("disk full")
        super().save(order)


class ExplodingUserRepository(FakeUserRepository):

    def save(self, user: User) -> None:
        raise OSError("disk full")


# --- Builders -----------------------------------------------------------------

ALICE = User(id="u-alice", identity_id="alice", email="alice@example.com", name="Alice")
BOB = User(id="u-bob", identity_id="bob", email="bob@example.com", name="Bob")


def make_skus() -> list[Sku]:
    """SKU-A: 10 Widgets at $15, SKU-B: 5 Gadgets at $25."""
    return [
        Sku(id="A", sku_code="WID-RED", product_name="Widget",
            price=Money.of("15.00"), stock_quantity=10),
        Sku(id="B", sku_code="GAD-BLU", product_name="Gadget",
            price=Money.of("25.00"), stock_quantity=5),
    ]


def make_item(sku_id: str = "A", qty: int = 1, price: str = "15.00") -> OrderItem:
    return OrderItem(
        sku_id=sku_id,
        sku_code=f"CODE-{sku_id}",
        product_name=f"Product {sku_id}",
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


def make_order(
    user: User = ALICE,
    lines: tuple[tuple[str, int], ...] = (("A", 3), ("B", 1)),
) -> Order:
    """A pending order; by default 3 x SKU-A and 1 x SKU-B."""
    return Order.place(
        user_id=user.id,
        items=[make_item(sku_id, qty) for sku_id, qty in lines],
    )


def advance(order: Order, *statuses: OrderStatus) -> Order:
    for status in statuses:
        order.update_status(status)
    return order
