"""Basket view — the derived, never-stored picture of a user's basket."""

from dataclasses import dataclass, field
from decimal import Decimal

from shopping.basket.item import LineItem
from shopping.utils.money import as_amount


@dataclass(frozen=True)
class Basket:
    """Items currently cached for a user plus their ledger balance.

    ``total`` is recomputed from the items on every access. The remaining
    balance is the current ledger balance, not reduced by the basket total.
    """

    items: tuple[LineItem, ...] = field(default_factory=tuple)
    remaining_balance: float = 0.0

    @property
    def total(self) -> float:
        return as_amount(sum((item.cost for item in self.items), Decimal("0")))

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        return sum(item.count for item in self.items)

    def find(self, product_id: str) -> LineItem | None:
        return next((item for item in self.items if item.product_id == product_id), None)
