import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers
from shopping.api import basket_router, order_router
from shopping.api.errors import register_error_handlers
from shopping.basket.store import get_basket_store


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(basket_router)
    app.include_router(order_router)
    register_exception_handlers(app)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def store():
    return get_basket_store()


@pytest.fixture()
def headers():
    return {"X-User-Id": "alice"}


def item_payload(product_id="1-2-3-4-5-6", count=1, price=50.0, name="Espresso beans"):
    return {"productId": product_id, "productName": name, "count": count, "price": price}


@pytest.fixture()
def payload():
    return item_payload
