"""Order history — read side of the order ledger."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from shopping.account.account import Account
from shopping.errors import OrderNotFoundError
from shopping.order.order import Order


def get_completed_orders(user):
    """All orders placed by ``user``, most recent first."""
    account = current_domain.repository_for(Account).by_name(user)
    return current_domain.repository_for(Order).for_account(account.id)


def get_order(user, order_id):
    """A single order of ``user``; orders of other users are reported as missing."""
    account = current_domain.repository_for(Account).by_name(user)
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise OrderNotFoundError(f"Order not found: {order_id}") from None

    if str(order.account_id) != str(account.id):
        raise OrderNotFoundError(f"Order not found: {order_id}")
    return order
