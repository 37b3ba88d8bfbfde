"""LineItem value object — a product entry in a basket."""

import json
import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, Integer, String

from shopping.domain import shopping
from shopping.errors import CorruptBasketError
from shopping.utils.money import line_cost

PRODUCT_ID_PATTERN = re.compile(r"^[0-9]-[0-9]-[0-9]-[0-9]-[0-9]-[0-9]$")
MIN_UNIT_PRICE = 10.0
MAX_UNIT_PRICE = 100.0


@shopping.value_object
class LineItem:
    """A product, its display name, how many of it and the price of one.

    Line items are identified inside a basket by ``product_id``; two items with
    the same product id never coexist. Once validated the item is immutable, a
    change of count replaces the whole item.
    """

    product_id = String(required=True, max_length=11)
    product_name = String(required=True, max_length=255)
    count = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=MIN_UNIT_PRICE, max_value=MAX_UNIT_PRICE)

    @invariant.post
    def product_id_must_be_six_dashed_digits(self):
        if self.product_id is not None and not PRODUCT_ID_PATTERN.match(self.product_id):
            raise ValidationError(
                {"product_id": ["Product id must be six single digits separated by dashes (e.g. 1-2-3-4-5-6)"]}
            )

    @invariant.post
    def product_name_must_not_be_blank(self):
        if self.product_name is not None and not self.product_name.strip():
            raise ValidationError({"product_name": ["Product name must not be blank"]})

    @property
    def cost(self):
        return line_cost(self.unit_price, self.count)

    def to_json(self) -> str:
        return json.dumps(
            {
                "productId": self.product_id,
                "productName": self.product_name,
                "count": self.count,
                "price": self.unit_price,
            }
        )

    @classmethod
    def from_json(cls, payload):
        """Rebuild an item from its cached form.

        Anything that does not decode into a valid item is corrupt state and
        raises ``CorruptBasketError``.
        """
        try:
            data = json.loads(payload)
            return cls(
                product_id=data["productId"],
                product_name=data["productName"],
                count=data["count"],
                unit_price=data["price"],
            )
        except (TypeError, ValueError, KeyError, ValidationError) as exc:
            raise CorruptBasketError(f"Unreadable basket entry: {exc}") from exc
