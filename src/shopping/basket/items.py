"""Basket item management — commands and handler.

``product_id`` addresses the basket slot (the URL path), ``item`` is the line
item sent in the request body. The engine rejects the command when the two
disagree.
"""

from protean import handle
from protean.fields import String, ValueObject

from shopping.account.account import Account
from shopping.basket.engine import BasketEngine
from shopping.basket.item import LineItem
from shopping.domain import shopping


@shopping.command(part_of="Account")
class AddBasketItem:
    """Put a product into the user's basket."""

    user = String(required=True, max_length=255)
    product_id = String(required=True, max_length=255)
    item = ValueObject(LineItem, required=True)


@shopping.command(part_of="Account")
class ChangeBasketItemCount:
    """Replace a product already in the basket with a new count, price and name."""

    user = String(required=True, max_length=255)
    product_id = String(required=True, max_length=255)
    item = ValueObject(LineItem, required=True)


@shopping.command(part_of="Account")
class RemoveBasketItem:
    user = String(required=True, max_length=255)
    product_id = String(required=True, max_length=255)


@shopping.command_handler(part_of=Account)
class ManageBasketItemsHandler:
    """Basket mutations return the refreshed basket view."""

    @handle(AddBasketItem)
    def add_basket_item(self, command):
        return BasketEngine().add_item(
            user=command.user,
            product_id=command.product_id,
            item=command.item,
        )

    @handle(ChangeBasketItemCount)
    def change_basket_item_count(self, command):
        return BasketEngine().change_item_count(
            user=command.user,
            product_id=command.product_id,
            item=command.item,
        )

    @handle(RemoveBasketItem)
    def remove_basket_item(self, command):
        return BasketEngine().remove_item(user=command.user, product_id=command.product_id)
