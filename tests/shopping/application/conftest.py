import pytest
from shopping.basket.engine import BasketEngine
from shopping.basket.item import LineItem
from shopping.basket.store.memory_adapter import MemoryBasketStore


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store(clock):
    from shopping.basket.store import set_basket_store

    store = MemoryBasketStore(clock=clock)
    set_basket_store(store)
    return store


@pytest.fixture()
def engine(store):
    return BasketEngine(store=store, ttl_seconds=120)


@pytest.fixture()
def make_item():
    def _make(product_id="1-2-3-4-5-6", count=1, price=50.0, name=None):
        return LineItem(
            product_id=product_id,
            product_name=name or f"Product {product_id}",
            count=count,
            unit_price=price,
        )

    return _make
