"""Account opening — command and handler."""

from protean import handle
from protean.fields import Float, String
from protean.utils.globals import current_domain

from shopping.account.account import Account
from shopping.domain import shopping
from shopping.errors import AccountExistsError


@shopping.command(part_of="Account")
class OpenAccount:
    """Register a user with an initial prepaid balance."""

    name = String(required=True, max_length=255)
    balance = Float(default=0.0, min_value=0.0)


@shopping.command_handler(part_of=Account)
class OpenAccountHandler:
    @handle(OpenAccount)
    def open_account(self, command):
        repo = current_domain.repository_for(Account)
        if repo.exists(command.name):
            raise AccountExistsError(f"An account named {command.name!r} already exists")

        account = Account.open(name=command.name, balance=command.balance or 0.0)
        repo.add(account)
        return str(account.id)
