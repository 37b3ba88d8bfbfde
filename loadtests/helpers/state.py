"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
"""

from dataclasses import dataclass, field


@dataclass
class BasketState:
    """Tracks the products a simulated shopper put into their basket."""

    user: str | None = None
    product_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)
