"""Shared BDD fixtures and step definitions for baskets and checkout."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from shopping.account.account import Account
from shopping.account.opening import OpenAccount
from shopping.basket.engine import BasketEngine
from shopping.basket.item import LineItem
from shopping.errors import BadRequestError, ConflictError
from shopping.order.history import get_completed_orders


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured business-rule errors."""
    return {"exc": None}


@pytest.fixture()
def result():
    return {"basket": None, "order": None}


@pytest.fixture()
def engine():
    return BasketEngine()


@pytest.fixture()
def line_item():
    def _make(product_id, count, price):
        return LineItem(
            product_id=product_id,
            product_name=f"Product {product_id}",
            count=int(count),
            unit_price=float(price),
        )

    return _make


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a shopper "{name}" with a balance of {balance:g}'))
def shopper_with_balance(name, balance):
    current_domain.process(OpenAccount(name=name, balance=balance), asynchronous=False)


@given(parsers.cfparse('"{name}" has added {count:d} of product "{product_id}" at {price:g}'))
def shopper_has_added(engine, line_item, name, count, product_id, price):
    engine.add_item(name, product_id, line_item(product_id, count, price))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the request is refused as a bad request")
def refused_bad_request(error):
    assert isinstance(error["exc"], BadRequestError)


@then("the request is refused as a conflict")
def refused_conflict(error):
    assert isinstance(error["exc"], ConflictError)


@then(parsers.cfparse("the basket total is {total:g}"))
def basket_total(result, total):
    assert result["basket"].total == total


@then(parsers.cfparse("the remaining balance is {balance:g}"))
def remaining_balance(result, balance):
    assert result["basket"].remaining_balance == balance


@then("the basket is empty")
def basket_is_empty(engine):
    assert engine.get_basket("alice").is_empty


@then(parsers.cfparse('the balance of "{name}" is {balance:g}'))
def balance_of(name, balance):
    assert current_domain.repository_for(Account).by_name(name).balance == balance


@then(parsers.cfparse('"{name}" has no orders'))
def has_no_orders(name):
    assert get_completed_orders(name) == []
