"""Basket store port (abstract interface).

A basket is one cache entry per user: a hash of ``product_id -> serialized
LineItem`` with a time-to-live on the whole entry. Adapters supply the
expiry mechanism and a per-user lock. Every method is a single-field or
single-key operation, so check-then-act sequences must run inside ``lock``.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager


class BasketStore(ABC):
    """Abstract basket cache store."""

    @abstractmethod
    def entries(self, user: str) -> dict[str, str]:
        """Return every cached ``product_id -> payload`` pair for the user."""
        ...

    @abstractmethod
    def contains(self, user: str, product_id: str) -> bool:
        ...

    @abstractmethod
    def size(self, user: str) -> int:
        """Number of distinct products in the user's basket."""
        ...

    @abstractmethod
    def put(self, user: str, product_id: str, payload: str, ttl_seconds: float | None = None) -> None:
        """Store one product and, when ``ttl_seconds`` is given, reset the expiry.

        The write and the expiry reset take effect together or not at all, so
        a failed write never leaves an entry without a deadline.
        """
        ...

    @abstractmethod
    def discard(self, user: str, product_id: str) -> bool:
        """Delete one product; return whether it was present."""
        ...

    @abstractmethod
    def clear(self, user: str) -> None:
        """Delete the whole entry. Clearing a missing entry is not an error."""
        ...

    @abstractmethod
    def touch(self, user: str, ttl_seconds: float) -> None:
        """Reset the entry's expiry to ``ttl_seconds`` from now."""
        ...

    @abstractmethod
    def ttl(self, user: str) -> float | None:
        """Seconds until the entry expires, or None if there is no expiring entry."""
        ...

    @abstractmethod
    def lock(self, user: str) -> AbstractContextManager:
        """Mutual exclusion scope for all basket work on behalf of one user."""
        ...
