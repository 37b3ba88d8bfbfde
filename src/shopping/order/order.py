"""Order aggregate — the append-only order ledger.

An order is written exactly once, at checkout, and never changes afterwards.
Its items are snapshots of the basket's line items at that moment, so later
price or name changes in a basket never reach a placed order.
"""

from datetime import UTC, datetime
from decimal import Decimal

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from shopping.domain import shopping
from shopping.errors import BadRequestError
from shopping.order.events import OrderPlaced
from shopping.utils.money import as_amount


@shopping.entity(part_of="Order")
class OrderItem:
    """One basket line captured at checkout."""

    product_id = String(required=True, max_length=11)
    product_name = String(required=True, max_length=255)
    count = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


@shopping.aggregate
class Order:
    account_id = Identifier(required=True)
    total = Float(required=True, min_value=0.0)
    placed_at = DateTime(required=True)
    items = HasMany(OrderItem)

    @classmethod
    def place(cls, account_id, line_items):
        """Create an order from the given basket line items."""
        if not line_items:
            raise BadRequestError("Cannot place an order without items")

        total = as_amount(sum((item.cost for item in line_items), Decimal("0")))
        now = datetime.now(UTC)

        order = cls(account_id=str(account_id), total=total, placed_at=now)
        for item in line_items:
            order.add_items(
                OrderItem(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    count=item.count,
                    price=item.unit_price,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                account_id=str(account_id),
                total=total,
                item_count=len(line_items),
                placed_at=now,
            )
        )
        return order


@shopping.repository(part_of=Order)
class OrderRepository:
    def for_account(self, account_id):
        """All orders of an account, most recent first."""
        return self._dao.query.filter(account_id=str(account_id)).order_by("-placed_at").all().items
