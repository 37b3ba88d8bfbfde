"""FastAPI endpoints for baskets and orders.

Endpoints are plain functions so FastAPI runs them in its threadpool: basket
work can wait on the per-user lock and on basket-clear retries, and that wait
must not hold up the event loop.
"""

from fastapi import APIRouter, Depends, Request, Response
from protean.utils.globals import current_domain

from shopping.api.auth import current_user
from shopping.api.schemas import BasketResponse, ItemRequest, OrderResponse
from shopping.basket.engine import BasketEngine
from shopping.basket.items import AddBasketItem, ChangeBasketItemCount, RemoveBasketItem
from shopping.basket.management import ClearBasket
from shopping.order.checkout import Checkout
from shopping.order.history import get_completed_orders, get_order

basket_router = APIRouter(prefix="/basket", tags=["basket"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


# --- Basket endpoints ---


@basket_router.get("", response_model=BasketResponse)
def get_basket(user: str = Depends(current_user)) -> BasketResponse:
    return BasketResponse.from_basket(BasketEngine().get_basket(user))


@basket_router.delete("", status_code=204)
def clear_basket(user: str = Depends(current_user)) -> Response:
    current_domain.process(ClearBasket(user=user), asynchronous=False)
    return Response(status_code=204)


@basket_router.post("", status_code=201, response_model=OrderResponse)
def place_order(request: Request, response: Response, user: str = Depends(current_user)) -> OrderResponse:
    order = Checkout().place_order(user)
    response.headers["Location"] = request.app.url_path_for("get_order", order_id=str(order.id))
    return OrderResponse.from_order(order)


@basket_router.post("/{product_id}", status_code=201, response_model=BasketResponse)
def add_item(product_id: str, body: ItemRequest, user: str = Depends(current_user)) -> BasketResponse:
    command = AddBasketItem(user=user, product_id=product_id, item=body.to_line_item())
    basket = current_domain.process(command, asynchronous=False)
    return BasketResponse.from_basket(basket)


@basket_router.delete("/{product_id}", response_model=BasketResponse)
def remove_item(product_id: str, user: str = Depends(current_user)) -> BasketResponse:
    basket = current_domain.process(RemoveBasketItem(user=user, product_id=product_id), asynchronous=False)
    return BasketResponse.from_basket(basket)


@basket_router.patch("/{product_id}", response_model=BasketResponse)
def change_item_count(product_id: str, body: ItemRequest, user: str = Depends(current_user)) -> BasketResponse:
    command = ChangeBasketItemCount(user=user, product_id=product_id, item=body.to_line_item())
    basket = current_domain.process(command, asynchronous=False)
    return BasketResponse.from_basket(basket)


# --- Order endpoints ---


@order_router.get("", response_model=list[OrderResponse])
def list_orders(user: str = Depends(current_user)) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in get_completed_orders(user)]


@order_router.get("/{order_id}", response_model=OrderResponse, name="get_order")
def get_order_by_id(order_id: str, user: str = Depends(current_user)) -> OrderResponse:
    return OrderResponse.from_order(get_order(user, order_id))
