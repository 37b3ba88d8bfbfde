"""Money arithmetic helpers.

Amounts are stored as floats on the aggregates; sums and comparisons go
through ``Decimal`` so totals like 0.1 + 0.2 stay exact to the cent.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def line_cost(unit_price, count) -> Decimal:
    return to_decimal(unit_price) * int(count)


def as_amount(value) -> float:
    """Round to the cent and hand back a float for storage and serialization."""
    return float(to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))
