"""Basket management — clearing a basket."""

from protean import handle
from protean.fields import String

from shopping.account.account import Account
from shopping.basket.engine import BasketEngine
from shopping.domain import shopping


@shopping.command(part_of="Account")
class ClearBasket:
    """Drop every item from the user's basket. Clearing an empty basket succeeds."""

    user = String(required=True, max_length=255)


@shopping.command_handler(part_of=Account)
class ManageBasketHandler:
    @handle(ClearBasket)
    def clear_basket(self, command):
        BasketEngine().clear_basket(user=command.user)
