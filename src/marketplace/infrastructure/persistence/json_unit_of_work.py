"""Unit of work over the JSON data files.

Repositories write through to their files as usual.  ``begin()`` takes a
per-directory lock and snapshots every data file; ``rollback()`` writes
the snapshots back.  Holding the lock for the whole block serialises
transactions on the same directory within this process, so the second
of two concurrent cancellations re-reads an already cancelled order.
"""

from __future__ import annotations

import threading
from pathlib import Path

from marketplace.domain.repository.unit_of_work import UnitOfWork
from marketplace.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from marketplace.infrastructure.persistence.json_sku_repository import (
    JsonSkuRepository,
)
from marketplace.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)

ORDERS_FILE = "orders.json"
SKUS_FILE = "skus.json"
USERS_FILE = "users.json"

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(data_dir: Path) -> threading.RLock:
    key = data_dir.resolve()
    with _locks_guard:
        return _locks.setdefault(key, threading.RLock())


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._files = [data_dir / ORDERS_FILE, data_dir / SKUS_FILE, data_dir / USERS_FILE]
        self.orders = JsonOrderRepository(data_dir / ORDERS_FILE)
        self.skus = JsonSkuRepository(data_dir / SKUS_FILE)
        self.users = JsonUserRepository(data_dir / USERS_FILE)
        self._lock = _lock_for(data_dir)
        self._snapshot: dict[Path, bytes] | None = None

    def begin(self) -> None:
        self._lock.acquire()
        try:
            self._snapshot = {path: path.read_bytes() for path in self._files}
        except BaseException:
            self._lock.release()
            raise

    def _commit(self) -> None:
        self._snapshot = None

    def rollback(self) -> None:
        if self._snapshot is None:
            return
        for path, content in self._snapshot.items():
            path.write_bytes(content)
        self._snapshot = None

    def end(self) -> None:
        self._lock.release()
