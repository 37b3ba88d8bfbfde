"""Pydantic request/response schemas for the Shopping API.

Wire names are camelCase (``productId``, ``remainingBalance``); Python code
uses the snake_case attribute names.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from shopping.basket.basket import Basket
from shopping.basket.item import MAX_UNIT_PRICE, MIN_UNIT_PRICE, PRODUCT_ID_PATTERN, LineItem
from shopping.order.order import Order, OrderItem


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Request Schemas ---


class ItemRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "productId": "1-2-3-4-5-6",
                    "productName": "Espresso beans 1kg",
                    "count": 1,
                    "price": 50.0,
                }
            ]
        },
    )

    product_id: str = Field(..., pattern=PRODUCT_ID_PATTERN.pattern)
    product_name: str = Field(..., max_length=255)
    count: int = Field(..., ge=1)
    price: float = Field(..., ge=MIN_UNIT_PRICE, le=MAX_UNIT_PRICE)

    @field_validator("product_name")
    @classmethod
    def name_must_not_be_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_line_item(self) -> LineItem:
        return LineItem(
            product_id=self.product_id,
            product_name=self.product_name,
            count=self.count,
            unit_price=self.price,
        )


# --- Response Schemas ---


class LineItemResponse(CamelModel):
    product_id: str
    product_name: str
    count: int
    price: float

    @classmethod
    def from_line_item(cls, item: LineItem) -> LineItemResponse:
        return cls(
            product_id=item.product_id,
            product_name=item.product_name,
            count=item.count,
            price=item.unit_price,
        )

    @classmethod
    def from_order_item(cls, item: OrderItem) -> LineItemResponse:
        return cls(
            product_id=item.product_id,
            product_name=item.product_name,
            count=item.count,
            price=item.price,
        )


class BasketResponse(CamelModel):
    items: list[LineItemResponse]
    total: float
    remaining_balance: float

    @classmethod
    def from_basket(cls, basket: Basket) -> BasketResponse:
        return cls(
            items=[LineItemResponse.from_line_item(item) for item in basket.items],
            total=basket.total,
            remaining_balance=basket.remaining_balance,
        )


class OrderResponse(CamelModel):
    id: str
    user_id: str
    total: float
    order_date: datetime
    items: list[LineItemResponse]

    @classmethod
    def from_order(cls, order: Order) -> OrderResponse:
        return cls(
            id=str(order.id),
            user_id=str(order.account_id),
            total=order.total,
            order_date=order.placed_at,
            items=[LineItemResponse.from_order_item(item) for item in order.items],
        )
