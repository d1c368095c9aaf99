# tradecore/services/locks.py

"""Per-aggregate mutual exclusion for orchestration calls."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLocks:
    """One re-entrant lock per key (a product ID), created on demand.

    Every orchestration that touches a product, and therefore the order
    referencing it, runs while holding that product's lock.  Locks are
    never discarded.  The registry does not validate keys; callers look
    the product up first so only IDs of existing listings get a lock.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def _lock_for(self, key: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def holding(self, key: str) -> Iterator[None]:
        """Hold the lock for *key* for the duration of the block."""
        lock = self._lock_for(key)
        with lock:
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
