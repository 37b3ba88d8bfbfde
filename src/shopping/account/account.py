"""Account aggregate — the user ledger.

Holds the user's external identity and prepaid balance. Basket operations read
the balance but never write it; the only writes are opening the account and
the debit performed at checkout.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, String

from shopping.account.events import AccountOpened, BalanceDebited
from shopping.domain import shopping
from shopping.errors import BadRequestError, UserNotFoundError
from shopping.utils.money import as_amount, to_decimal


@shopping.aggregate
class Account:
    name = String(required=True, max_length=255, unique=True)
    balance = Float(required=True, min_value=0.0, default=0.0)
    opened_at = DateTime()

    @invariant.post
    def balance_cannot_be_negative(self):
        if self.balance is not None and self.balance < 0:
            raise ValidationError({"balance": ["Balance cannot be negative"]})

    @classmethod
    def open(cls, name, balance=0.0):
        now = datetime.now(UTC)
        account = cls(name=name, balance=as_amount(balance), opened_at=now)
        account.raise_(
            AccountOpened(
                account_id=str(account.id),
                name=name,
                balance=account.balance,
                opened_at=now,
            )
        )
        return account

    def can_afford(self, amount):
        return to_decimal(amount) <= to_decimal(self.balance)

    def debit(self, amount):
        """Charge ``amount`` against the prepaid balance."""
        if not self.can_afford(amount):
            raise BadRequestError(f"Insufficient balance: required {as_amount(amount)}, available {self.balance}")

        self.balance = as_amount(to_decimal(self.balance) - to_decimal(amount))

        self.raise_(
            BalanceDebited(
                account_id=str(self.id),
                amount=as_amount(amount),
                balance=self.balance,
            )
        )


@shopping.repository(part_of=Account)
class AccountRepository:
    def by_name(self, name):
        """Look an account up by its external identity."""
        try:
            return self._dao.find_by(name=name)
        except ObjectNotFoundError:
            raise UserNotFoundError(f"User not found: {name}") from None

    def exists(self, name):
        try:
            self._dao.find_by(name=name)
        except ObjectNotFoundError:
            return False
        return True
