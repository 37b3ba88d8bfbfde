"""Checkout — turning a cached basket into a durable order.

The durable half (order creation and the balance debit) runs as the
``PlaceOrder`` command, so both writes commit in one unit of work or not at
all. ``Checkout`` wraps that command in the user's basket lock and clears the
cached basket only after the commit. The clear is idempotent and retried; if
it still fails the order stands and the basket expiry removes the leftovers.
"""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain
from tenacity import RetryError, Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from shopping.account.account import Account
from shopping.basket.engine import BasketEngine
from shopping.domain import shopping
from shopping.errors import BadRequestError, BasketStoreError
from shopping.order.order import Order
from shopping.utils.money import as_amount

logger = structlog.get_logger(__name__)

CLEAR_ATTEMPTS = 3
CLEAR_BACKOFF_SECONDS = 0.05


@shopping.command(part_of="Order")
class PlaceOrder:
    """Check out the user's current basket."""

    user = String(required=True, max_length=255)


@shopping.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        engine = BasketEngine()
        account = engine.find_account(command.user)
        basket = engine.read_basket(command.user, account)

        if basket.is_empty:
            raise BadRequestError("Cannot check out an empty basket")

        if not account.can_afford(basket.total):
            raise BadRequestError(
                f"Insufficient balance for checkout: required {as_amount(basket.total)}, available {account.balance}"
            )

        order = Order.place(account.id, basket.items)
        account.debit(basket.total)

        current_domain.repository_for(Order).add(order)
        current_domain.repository_for(Account).add(account)

        return order


class Checkout:
    def __init__(
        self,
        engine: BasketEngine | None = None,
        clear_attempts: int = CLEAR_ATTEMPTS,
        clear_backoff: float = CLEAR_BACKOFF_SECONDS,
    ) -> None:
        self.engine = engine or BasketEngine()
        self.clear_attempts = clear_attempts
        self.clear_backoff = clear_backoff

    @property
    def store(self):
        return self.engine.store

    def place_order(self, user: str) -> Order:
        """Place an order for everything in ``user``'s basket.

        Nothing else can touch the basket between reading it and clearing it:
        the whole sequence holds the per-user basket lock. A failed checkout
        leaves both the basket and the balance untouched.
        """
        with self.store.lock(user):
            order = current_domain.process(PlaceOrder(user=user), asynchronous=False)
            logger.info(
                "Order placed",
                user=user,
                order_id=str(order.id),
                total=order.total,
                item_count=len(order.items),
            )
            self._clear_basket(user, order)

        return order

    def _clear_basket(self, user: str, order: Order) -> None:
        try:
            for attempt in Retrying(
                retry=retry_if_exception_type(BasketStoreError),
                stop=stop_after_attempt(self.clear_attempts),
                wait=wait_exponential(multiplier=self.clear_backoff, max=1),
            ):
                with attempt:
                    self.store.clear(user)
        except RetryError:
            # The order is committed; the basket expiry takes care of the rest.
            logger.error(
                "Basket could not be cleared after checkout",
                user=user,
                order_id=str(order.id),
                attempts=self.clear_attempts,
            )
