"""In-memory order store.

Backs the callbacks the generic handlers are given:
  - ``find(order_id)``              -> ``(order, etag)`` or ``None``
  - ``try_delete(order_id, etag)``  -> ``Ok(None)`` or ``Err(DeleteError)``

Every write mints a fresh ETag. Reads and writes are serialised with a
re-entrant lock, so the compare-and-delete in ``try_delete`` is atomic per
store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Optional

from .handlers import DeleteError
from .orders import Order, OrderId
from .result import Err, Ok, Result
from .versioning import ETag, stable_etag


log = logging.getLogger("etag_server.state")


@dataclass(slots=True)
class OrderRecord:
    order: Order
    etag: ETag


class OrderStore:
    """Thread-safe in-memory store."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._global_revision = 0

        self.orders: dict[OrderId, OrderRecord] = {}

    def _bump_global(self) -> int:
        self._global_revision += 1
        return self._global_revision

    def put(self, order: Order, *, etag: Optional[ETag] = None) -> ETag:
        """Insert or replace ``order``; returns the ETag of the stored version.

        ``etag`` pins the version token instead of deriving one, which keeps
        fixtures predictable.
        """

        with self._lock:
            revision = self._bump_global()
            tag = etag if etag is not None else stable_etag(f"{order.id}|{revision}")
            self.orders[order.id] = OrderRecord(order=order, etag=tag)
            return tag

    def try_add(self, order: Order) -> Optional[ETag]:
        """Insert ``order`` unless its ID is taken; ``None`` when it already exists."""

        with self._lock:
            if order.id in self.orders:
                return None
            return self.put(order)

    def find(self, order_id: OrderId) -> Optional[tuple[Order, ETag]]:
        with self._lock:
            record = self.orders.get(order_id)
            if record is None:
                return None
            return record.order, record.etag

    def try_delete(self, order_id: OrderId, etag: ETag) -> Result:
        """Delete ``order_id`` if ``etag`` matches the stored version.

        Deleting an order that does not exist succeeds.
        """

        with self._lock:
            record = self.orders.get(order_id)
            if record is None:
                return Ok(None)
            if record.etag != etag:
                log.debug("delete of %s refused: stored %s, given %s", order_id, record.etag, etag)
                return Err(DeleteError.ETAG_MISMATCH)
            del self.orders[order_id]
            self._bump_global()
            return Ok(None)
