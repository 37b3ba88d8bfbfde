"""Basket engine — the rules for mutating a user's cached basket.

Every mutation runs inside the store's per-user lock and follows the same
shape: look the account up, check the rules against the current cache
contents, write a single field together with a fresh expiry and rebuild the basket view
from what is now stored. Totals are always derived from the stored items.

Error precedence for adding an item:
    path/body mismatch -> unknown user -> duplicate -> balance -> capacity
"""

import os
from decimal import Decimal

import structlog
from protean.utils.globals import current_domain

from shopping.account.account import Account
from shopping.basket.basket import Basket
from shopping.basket.item import LineItem
from shopping.basket.store import get_basket_store
from shopping.basket.store.port import BasketStore
from shopping.errors import (
    BadRequestError,
    BasketFullError,
    CorruptBasketError,
    DuplicateItemError,
    ItemNotFoundError,
    PaymentRequiredError,
)
from shopping.utils.money import as_amount

logger = structlog.get_logger(__name__)

MAX_ITEMS_IN_BASKET = 10
BASKET_TIMEOUT_SECONDS = 120


def basket_timeout_seconds() -> float:
    """Inactivity window after which an untouched basket expires."""
    return float(os.environ.get("BASKET_TTL_SECONDS", BASKET_TIMEOUT_SECONDS))


class BasketEngine:
    def __init__(
        self,
        store: BasketStore | None = None,
        ttl_seconds: float | None = None,
        max_items: int = MAX_ITEMS_IN_BASKET,
    ) -> None:
        self.store = store or get_basket_store()
        self.ttl_seconds = basket_timeout_seconds() if ttl_seconds is None else ttl_seconds
        self.max_items = max_items

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def find_account(self, user: str) -> Account:
        return current_domain.repository_for(Account).by_name(user)

    def get_basket(self, user: str) -> Basket:
        """Current basket of ``user``; a non-empty read slides the expiry."""
        return self.read_basket(user)

    def read_basket(self, user: str, account: Account | None = None) -> Basket:
        """Rebuild the basket view without taking the user lock.

        Callers that already hold ``store.lock(user)`` use this directly.
        """
        account = account or self.find_account(user)
        items = self._load_items(user)
        if items:
            self.store.touch(user, self.ttl_seconds)
        return Basket(items=tuple(items), remaining_balance=account.balance)

    def _load_items(self, user: str) -> list[LineItem]:
        items = []
        for product_id, payload in self.store.entries(user).items():
            try:
                items.append(LineItem.from_json(payload))
            except CorruptBasketError:
                logger.error("Corrupt basket entry", user=user, product_id=product_id, payload=payload)
                raise
        return items

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def clear_basket(self, user: str) -> None:
        with self.store.lock(user):
            self.store.clear(user)
        logger.info("Basket cleared", user=user)

    def add_item(self, user: str, product_id: str, item: LineItem) -> Basket:
        """Put a new product into the basket.

        Adding never merges counts: a product that is already present is a
        conflict and must be changed through ``change_item_count``. The balance
        check covers the new item's cost only, not the basket total.
        """
        self._check_product_id(product_id, item)

        with self.store.lock(user):
            account = self.find_account(user)

            if self.store.contains(user, product_id):
                raise DuplicateItemError(
                    f"Product {product_id} is already in the basket. Change its count instead of adding it again."
                )

            if not account.can_afford(item.cost):
                raise BadRequestError(
                    f"Insufficient balance for this item: costs {as_amount(item.cost)}, available {account.balance}"
                )

            if self.store.size(user) >= self.max_items:
                raise BasketFullError(f"The basket cannot hold more than {self.max_items} different products")

            self.store.put(user, product_id, item.to_json(), self.ttl_seconds)
            logger.info("Item added to basket", user=user, product_id=product_id, count=item.count)

            return self.read_basket(user, account)

    def remove_item(self, user: str, product_id: str) -> Basket:
        with self.store.lock(user):
            account = self.find_account(user)

            if not self.store.discard(user, product_id):
                raise ItemNotFoundError(f"Product {product_id} not found in basket")

            if self.store.size(user):
                self.store.touch(user, self.ttl_seconds)
            else:
                self.store.clear(user)
            logger.info("Item removed from basket", user=user, product_id=product_id)

            return self.read_basket(user, account)

    def change_item_count(self, user: str, product_id: str, item: LineItem) -> Basket:
        """Replace a stored item with ``item``.

        The replacement takes every mutable field from the request (count,
        price and name), not the count alone. Limits are checked against the
        basket as it would look afterwards: the sum of all counts must stay
        within the cap and the full basket cost within the balance.
        """
        self._check_product_id(product_id, item)

        with self.store.lock(user):
            account = self.find_account(user)

            if not self.store.contains(user, product_id):
                raise ItemNotFoundError(f"Product {product_id} not found in basket")

            updated = [item if current.product_id == product_id else current for current in self._load_items(user)]

            total_count = sum(current.count for current in updated)
            if total_count > self.max_items:
                raise BadRequestError(
                    f"A basket cannot hold more than {self.max_items} items, the change would make it {total_count}"
                )

            total_cost = sum((current.cost for current in updated), Decimal("0"))
            if not account.can_afford(total_cost):
                raise PaymentRequiredError(
                    f"Insufficient balance: required {as_amount(total_cost)}, available {account.balance}"
                )

            self.store.put(user, product_id, item.to_json(), self.ttl_seconds)
            logger.info("Basket item count changed", user=user, product_id=product_id, count=item.count)

            return self.read_basket(user, account)

    @staticmethod
    def _check_product_id(product_id: str, item: LineItem) -> None:
        if product_id != item.product_id:
            raise BadRequestError("Product id in path and item do not match")
