"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer

from shopping.domain import shopping


@shopping.event(part_of="Order")
class OrderPlaced:
    """A basket was checked out into a durable order."""

    __version__ = 1

    order_id = Identifier(required=True)
    account_id = Identifier(required=True)
    total = Float(required=True)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)
