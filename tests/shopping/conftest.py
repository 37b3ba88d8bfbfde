import os

import pytest


@pytest.fixture(scope="session")
def _shopping_domain(request):
    """Initialize the shopping domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from shopping.domain import shopping

    shopping.init()
    return shopping


@pytest.fixture(scope="session", autouse=True)
def setup_db(_shopping_domain):
    from shopping.utils.db import drop_db, setup_db

    setup_db(_shopping_domain)

    yield

    drop_db(_shopping_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_shopping_domain):
    """Push domain context before each test, cleanup after."""
    from shopping.basket.store import reset_basket_store, set_basket_store
    from shopping.basket.store.memory_adapter import MemoryBasketStore

    set_basket_store(MemoryBasketStore())

    ctx = _shopping_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()

    reset_basket_store()


@pytest.fixture()
def open_account():
    """Factory that opens an account through the OpenAccount command."""
    from protean import current_domain
    from shopping.account.account import Account
    from shopping.account.opening import OpenAccount

    def _open(name="alice", balance=100.0):
        current_domain.process(OpenAccount(name=name, balance=balance), asynchronous=False)
        return current_domain.repository_for(Account).by_name(name)

    return _open


@pytest.fixture()
def alice(open_account):
    return open_account("alice", 100.0)
