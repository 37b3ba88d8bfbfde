"""Tests for the basket rules enforced by BasketEngine."""

import pytest
from shopping.errors import (
    BadRequestError,
    BasketFullError,
    CorruptBasketError,
    DuplicateItemError,
    ItemNotFoundError,
    PaymentRequiredError,
    UserNotFoundError,
)


def _pid(n):
    return "-".join([str(n % 10)] * 6)


class TestGetBasket:
    def test_unknown_user(self, engine):
        with pytest.raises(UserNotFoundError):
            engine.get_basket("nobody")

    def test_empty_basket(self, engine, alice):
        basket = engine.get_basket("alice")
        assert basket.is_empty
        assert basket.total == 0.0
        assert basket.remaining_balance == 100.0

    def test_corrupt_entry_is_surfaced(self, engine, store, alice):
        store.put("alice", "1-2-3-4-5-6", "{broken")
        with pytest.raises(CorruptBasketError):
            engine.get_basket("alice")


class TestAddItem:
    def test_add_then_get_returns_exactly_the_item(self, engine, alice, make_item):
        item = make_item(count=2, price=25.0)
        engine.add_item("alice", item.product_id, item)

        basket = engine.get_basket("alice")
        assert basket.items == (item,)
        assert basket.total == 50.0

    def test_path_and_body_mismatch(self, engine, alice, make_item):
        with pytest.raises(BadRequestError):
            engine.add_item("alice", "9-9-9-9-9-9", make_item())

    def test_unknown_user(self, engine, make_item):
        with pytest.raises(UserNotFoundError):
            engine.add_item("nobody", "1-2-3-4-5-6", make_item())

    def test_duplicate_product_is_a_conflict(self, engine, alice, make_item):
        engine.add_item("alice", "1-2-3-4-5-6", make_item(price=10))
        with pytest.raises(DuplicateItemError):
            engine.add_item("alice", "1-2-3-4-5-6", make_item(price=10))

    def test_item_cost_above_balance(self, engine, alice, make_item):
        with pytest.raises(BadRequestError):
            engine.add_item("alice", "1-2-3-4-5-6", make_item(count=2, price=60))
        assert engine.get_basket("alice").is_empty

    def test_balance_check_covers_new_item_only(self, engine, alice, make_item):
        engine.add_item("alice", _pid(1), make_item(_pid(1), price=60))
        basket = engine.add_item("alice", _pid(2), make_item(_pid(2), price=60))
        assert basket.total == 120.0

    def test_eleventh_distinct_item_is_refused(self, engine, open_account, make_item):
        open_account("rich", 10_000)
        for n in range(10):
            engine.add_item("rich", _pid(n), make_item(_pid(n), price=10))

        with pytest.raises(BasketFullError):
            engine.add_item("rich", "1-2-3-4-5-7", make_item("1-2-3-4-5-7", price=10))
        assert len(engine.get_basket("rich").items) == 10

    def test_mismatch_wins_over_unknown_user(self, engine, make_item):
        with pytest.raises(BadRequestError):
            engine.add_item("nobody", "9-9-9-9-9-9", make_item())

    def test_unknown_user_wins_over_duplicate(self, engine, store, make_item):
        store.put("nobody", "1-2-3-4-5-6", make_item().to_json())
        with pytest.raises(UserNotFoundError):
            engine.add_item("nobody", "1-2-3-4-5-6", make_item())

    def test_duplicate_wins_over_balance(self, engine, alice, make_item):
        engine.add_item("alice", "1-2-3-4-5-6", make_item(price=10))
        with pytest.raises(DuplicateItemError):
            engine.add_item("alice", "1-2-3-4-5-6", make_item(count=5, price=100))

    def test_balance_wins_over_capacity(self, engine, open_account, make_item):
        open_account("bounded", 100)
        for n in range(10):
            engine.add_item("bounded", _pid(n), make_item(_pid(n), price=10))

        with pytest.raises(BadRequestError):
            engine.add_item("bounded", "1-2-3-4-5-7", make_item("1-2-3-4-5-7", count=2, price=100))

    def test_add_sets_expiry(self, engine, store, alice, make_item):
        engine.add_item("alice", "1-2-3-4-5-6", make_item())
        assert store.ttl("alice") == pytest.approx(120)


class TestRemoveItem:
    def test_remove_existing_item(self, engine, alice, make_item):
        engine.add_item("alice", _pid(1), make_item(_pid(1), price=10))
        engine.add_item("alice", _pid(2), make_item(_pid(2), price=10))

        basket = engine.remove_item("alice", _pid(1))

        assert basket.find(_pid(1)) is None
        assert basket.find(_pid(2)) is not None

    def test_remove_absent_item(self, engine, alice):
        with pytest.raises(ItemNotFoundError):
            engine.remove_item("alice", "1-2-3-4-5-6")

    def test_remove_for_unknown_user(self, engine):
        with pytest.raises(UserNotFoundError):
            engine.remove_item("nobody", "1-2-3-4-5-6")

    def test_removing_last_item_empties_basket(self, engine, store, alice, make_item):
        engine.add_item("alice", "1-2-3-4-5-6", make_item())
        basket = engine.remove_item("alice", "1-2-3-4-5-6")

        assert basket.is_empty
        assert store.ttl("alice") is None


class TestChangeItemCount:
    def test_change_count(self, engine, alice, make_item):
        engine.add_item("alice", "1-2-3-4-5-6", make_item(price=20))

        basket = engine.change_item_count("alice", "1-2-3-4-5-6", make_item(count=3, price=20))

        assert basket.find("1-2-3-4-5-6").count == 3
        assert basket.total == 60.0

    def test_change_replaces_price_and_name(self, engine, alice, make_item):
        engine.add_item("alice", "1-2-3-4-5-6", make_item(price=20, name="Old"))

        basket = engine.change_item_count("alice", "1-2-3-4-5-6", make_item(count=2, price=15, name="New"))

        item = basket.find("1-2-3-4-5-6")
        assert (item.product_name, item.count, item.unit_price) == ("New", 2, 15.0)

    def test_path_and_body_mismatch(self, engine, alice, make_item):
        with pytest.raises(BadRequestError):
            engine.change_item_count("alice", "9-9-9-9-9-9", make_item())

    def test_unknown_user(self, engine, make_item):
        with pytest.raises(UserNotFoundError):
            engine.change_item_count("nobody", "1-2-3-4-5-6", make_item())

    def test_absent_item(self, engine, alice, make_item):
        with pytest.raises(ItemNotFoundError):
            engine.change_item_count("alice", "1-2-3-4-5-6", make_item())

    def test_total_count_above_cap(self, engine, open_account, make_item):
        open_account("rich", 10_000)
        engine.add_item("rich", _pid(1), make_item(_pid(1), count=5, price=10))
        engine.add_item("rich", _pid(2), make_item(_pid(2), count=1, price=10))

        with pytest.raises(BadRequestError):
            engine.change_item_count("rich", _pid(2), make_item(_pid(2), count=6, price=10))

    def test_total_count_at_cap_is_allowed(self, engine, open_account, make_item):
        open_account("rich", 10_000)
        engine.add_item("rich", _pid(1), make_item(_pid(1), count=5, price=10))
        engine.add_item("rich", _pid(2), make_item(_pid(2), count=1, price=10))

        basket = engine.change_item_count("rich", _pid(2), make_item(_pid(2), count=5, price=10))
        assert basket.item_count == 10

    def test_aggregate_cost_above_balance(self, engine, alice, make_item):
        engine.add_item("alice", _pid(1), make_item(_pid(1), price=50))
        engine.add_item("alice", _pid(2), make_item(_pid(2), price=30))

        with pytest.raises(PaymentRequiredError):
            engine.change_item_count("alice", _pid(2), make_item(_pid(2), count=2, price=30))

        assert engine.get_basket("alice").find(_pid(2)).count == 1


class TestClearBasket:
    def test_clear_twice(self, engine, alice, make_item):
        engine.add_item("alice", "1-2-3-4-5-6", make_item())
        engine.clear_basket("alice")
        engine.clear_basket("alice")
        assert engine.get_basket("alice").is_empty


class TestBasketExpiry:
    def test_untouched_basket_is_empty_after_window(self, engine, clock, alice, make_item):
        engine.add_item("alice", "1-2-3-4-5-6", make_item())
        clock.advance(121)
        assert engine.get_basket("alice").is_empty

    def test_non_empty_read_slides_window(self, engine, clock, alice, make_item):
        engine.add_item("alice", "1-2-3-4-5-6", make_item())
        clock.advance(100)
        engine.get_basket("alice")
        clock.advance(100)
        assert not engine.get_basket("alice").is_empty

    def test_mutation_slides_window(self, engine, clock, alice, make_item):
        engine.add_item("alice", _pid(1), make_item(_pid(1), price=10))
        clock.advance(100)
        engine.add_item("alice", _pid(2), make_item(_pid(2), price=10))
        clock.advance(100)
        assert len(engine.get_basket("alice").items) == 2

    def test_ttl_from_environment(self, store, monkeypatch):
        from shopping.basket.engine import BasketEngine

        monkeypatch.setenv("BASKET_TTL_SECONDS", "30")
        assert BasketEngine(store=store).ttl_seconds == 30.0

    def test_explicit_ttl_is_kept_even_when_zero(self, store, monkeypatch):
        from shopping.basket.engine import BasketEngine

        monkeypatch.setenv("BASKET_TTL_SECONDS", "30")
        assert BasketEngine(store=store, ttl_seconds=0).ttl_seconds == 0
        assert BasketEngine(store=store, ttl_seconds=45).ttl_seconds == 45
