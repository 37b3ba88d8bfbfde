"""Domain events for the Account aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from shopping.domain import shopping


@shopping.event(part_of="Account")
class AccountOpened:
    """A user account was opened with a prepaid balance."""

    __version__ = 1

    account_id = Identifier(required=True)
    name = String(required=True)
    balance = Float(required=True)
    opened_at = DateTime(required=True)


@shopping.event(part_of="Account")
class BalanceDebited:
    """The prepaid balance was charged at checkout."""

    __version__ = 1

    account_id = Identifier(required=True)
    amount = Float(required=True)
    balance = Float(required=True)
