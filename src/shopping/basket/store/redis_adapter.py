"""Redis basket store for production.

Each basket is a Redis hash at ``basket:{user}`` whose fields are product ids
and whose values are JSON line items. Expiry is Redis' own ``EXPIRE`` on the
key. The per-user lock is a Redis lock so that every service instance shares
it. Connection problems become ``BasketStoreError``.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import redis
import structlog
from redis.exceptions import LockError, RedisError

from shopping.basket.store.port import BasketStore
from shopping.errors import BasketStoreError

logger = structlog.get_logger(__name__)


def _whole_seconds(ttl_seconds: float) -> int:
    return max(1, round(ttl_seconds))


class RedisBasketStore(BasketStore):
    """Basket store backed by Redis hashes."""

    def __init__(
        self,
        client: redis.Redis,
        key_prefix: str = "basket:",
        lock_prefix: str = "basket-lock:",
        lock_timeout: float = 10.0,
        lock_wait: float = 5.0,
    ) -> None:
        self.client = client
        self.key_prefix = key_prefix
        self.lock_prefix = lock_prefix
        self.lock_timeout = lock_timeout
        self.lock_wait = lock_wait

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisBasketStore":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=2.0,
            socket_connect_timeout=2.0,
        )
        return cls(client, **kwargs)

    def _key(self, user: str) -> str:
        return f"{self.key_prefix}{user}"

    @contextmanager
    def _errors(self, operation: str, user: str) -> Iterator[None]:
        try:
            yield
        except RedisError as exc:
            logger.error("Basket store operation failed", operation=operation, user=user, error=str(exc))
            raise BasketStoreError(f"Basket store {operation} failed: {exc}") from exc

    def entries(self, user: str) -> dict[str, str]:
        with self._errors("read", user):
            return self.client.hgetall(self._key(user))

    def contains(self, user: str, product_id: str) -> bool:
        with self._errors("exists", user):
            return bool(self.client.hexists(self._key(user), product_id))

    def size(self, user: str) -> int:
        with self._errors("size", user):
            return int(self.client.hlen(self._key(user)))

    def put(self, user: str, product_id: str, payload: str, ttl_seconds: float | None = None) -> None:
        key = self._key(user)
        with self._errors("write", user):
            if ttl_seconds is None:
                self.client.hset(key, product_id, payload)
                return

            # MULTI/EXEC: the field and its expiry land together or not at all
            pipe = self.client.pipeline(transaction=True)
            pipe.hset(key, product_id, payload)
            pipe.expire(key, _whole_seconds(ttl_seconds))
            pipe.execute()

    def discard(self, user: str, product_id: str) -> bool:
        with self._errors("delete", user):
            return int(self.client.hdel(self._key(user), product_id)) > 0

    def clear(self, user: str) -> None:
        with self._errors("clear", user):
            self.client.delete(self._key(user))

    def touch(self, user: str, ttl_seconds: float) -> None:
        with self._errors("expire", user):
            self.client.expire(self._key(user), _whole_seconds(ttl_seconds))

    def ttl(self, user: str) -> float | None:
        with self._errors("ttl", user):
            remaining = self.client.ttl(self._key(user))
        # -2: no such key, -1: key without expiry
        if remaining is None or remaining < 0:
            return None
        return float(remaining)

    @contextmanager
    def lock(self, user: str) -> Iterator[None]:
        user_lock = self.client.lock(
            f"{self.lock_prefix}{user}",
            timeout=self.lock_timeout,
            blocking_timeout=self.lock_wait,
        )
        with self._errors("lock", user):
            acquired = user_lock.acquire()
        if not acquired:
            raise BasketStoreError(f"Timed out waiting for the basket lock of {user}")
        try:
            yield
        finally:
            try:
                user_lock.release()
            except LockError:
                logger.warning("Basket lock expired before release", user=user)
            except RedisError as exc:
                logger.warning("Basket lock could not be released", user=user, error=str(exc))
