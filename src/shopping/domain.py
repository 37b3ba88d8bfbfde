"""Shopping bounded context — User Ledger, Basket and Order Ledger.

Per-user baskets live in an expiring cache store, accounts and orders are
durable aggregates. Checkout is the only operation that spans both: it turns
a cached basket into an Order and debits the Account in one unit of work.
"""

from protean.domain import Domain

from shopping.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

shopping = Domain(name="shopping")
