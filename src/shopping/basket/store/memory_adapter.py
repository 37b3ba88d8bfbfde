"""In-process basket store for development and testing.

Behaves like the Redis adapter: a new entry has no expiry until it is
touched or written with a TTL, removing the last product deletes the entry, and an entry past its
deadline is gone the next time anything looks at it. The clock is injectable
so tests can move time forward instead of sleeping.
"""

import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from shopping.basket.store.port import BasketStore
from shopping.errors import BasketStoreError


@dataclass
class _Entry:
    fields: dict[str, str] = field(default_factory=dict)
    expires_at: float | None = None


@dataclass
class _LockSlot:
    lock: threading.RLock = field(default_factory=threading.RLock)
    holders: int = 0


class MemoryBasketStore(BasketStore):
    """Dictionary-backed basket store with per-user reentrant locks."""

    def __init__(self, clock: Callable[[], float] = time.monotonic, lock_wait: float = 5.0) -> None:
        self._clock = clock
        self.lock_wait = lock_wait
        self._entries: dict[str, _Entry] = {}
        self._guard = threading.Lock()
        self._locks: dict[str, _LockSlot] = {}

    def _live(self, user: str) -> _Entry | None:
        entry = self._entries.get(user)
        if entry is None:
            return None
        if entry.expires_at is not None and entry.expires_at <= self._clock():
            del self._entries[user]
            return None
        return entry

    def entries(self, user: str) -> dict[str, str]:
        with self._guard:
            entry = self._live(user)
            return dict(entry.fields) if entry else {}

    def contains(self, user: str, product_id: str) -> bool:
        with self._guard:
            entry = self._live(user)
            return entry is not None and product_id in entry.fields

    def size(self, user: str) -> int:
        with self._guard:
            entry = self._live(user)
            return len(entry.fields) if entry else 0

    def put(self, user: str, product_id: str, payload: str, ttl_seconds: float | None = None) -> None:
        with self._guard:
            entry = self._live(user)
            if entry is None:
                entry = self._entries[user] = _Entry()
            entry.fields[product_id] = payload
            if ttl_seconds is not None:
                entry.expires_at = self._clock() + ttl_seconds

    def discard(self, user: str, product_id: str) -> bool:
        with self._guard:
            entry = self._live(user)
            if entry is None or product_id not in entry.fields:
                return False
            del entry.fields[product_id]
            if not entry.fields:
                del self._entries[user]
            return True

    def clear(self, user: str) -> None:
        with self._guard:
            self._entries.pop(user, None)

    def touch(self, user: str, ttl_seconds: float) -> None:
        with self._guard:
            entry = self._live(user)
            if entry is not None:
                entry.expires_at = self._clock() + ttl_seconds

    def ttl(self, user: str) -> float | None:
        with self._guard:
            entry = self._live(user)
            if entry is None or entry.expires_at is None:
                return None
            return entry.expires_at - self._clock()

    @contextmanager
    def lock(self, user: str) -> Iterator[None]:
        with self._guard:
            slot = self._locks.get(user)
            if slot is None:
                slot = self._locks[user] = _LockSlot()
            slot.holders += 1

        try:
            if not slot.lock.acquire(timeout=self.lock_wait):
                raise BasketStoreError(f"Timed out waiting for the basket lock of {user}")
            try:
                yield
            finally:
                slot.lock.release()
        finally:
            # Forget the lock once nobody holds or waits for it.
            with self._guard:
                slot.holders -= 1
                if not slot.holders:
                    del self._locks[user]
