"""Basket store factory.

Provides get_basket_store() / set_basket_store() to swap implementations:
- MemoryBasketStore for development and testing (default)
- RedisBasketStore for production, selected with BASKET_STORE=redis
"""

import os

from shopping.basket.store.port import BasketStore

_current_store: BasketStore | None = None


def get_basket_store() -> BasketStore:
    """Return the configured basket store (singleton)."""
    global _current_store
    if _current_store is None:
        backend = os.environ.get("BASKET_STORE", "memory")
        if backend == "memory":
            from shopping.basket.store.memory_adapter import MemoryBasketStore

            _current_store = MemoryBasketStore()
        elif backend == "redis":
            from shopping.basket.store.redis_adapter import RedisBasketStore

            _current_store = RedisBasketStore.from_url(os.environ.get("REDIS_URL", "redis://localhost:6379/0"))
        else:
            raise ValueError(f"Unknown basket store: {backend}")
    return _current_store


def set_basket_store(store: BasketStore) -> None:
    """Override the active basket store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_basket_store() -> None:
    """Reset to the configured default store."""
    global _current_store
    _current_store = None
