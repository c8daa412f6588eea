from decimal import Decimal

import pytest

from app.core.exceptions import InvalidArgumentError, NotFoundError
from app.models import Price, PriceHistory
from app.services.history_repository import PriceHistoryRepository
from app.services.price_repository import PriceRepository, parse_price_value


@pytest.mark.parametrize("value", ["12", "12.9", "12.90", "0", "0.05", "1234.50"])
def test_parse_price_value_accepts_up_to_two_decimals(value):
    assert parse_price_value(value) == Decimal(value)


@pytest.mark.parametrize("value", ["", "abc", "-1.00", "12.345", "12,90", "1e3", ".50", "12.90\n", "\u0661\u0662.90"])
def test_parse_price_value_rejects_malformed(value):
    with pytest.raises(InvalidArgumentError):
        parse_price_value(value)


def test_register_creates_price_and_created_history(db, user, competitors, make_product):
    product = make_product("Smirnoff Ice")
    dinho = competitors["DINHO"]

    price = PriceRepository.register_price(db, product.id, dinho.id, "12.90", acting_user_id=user.id)

    assert price.value == Decimal("12.90")
    assert price.registered_by == user.id

    history = PriceHistoryRepository.get_history(db)
    assert len(history) == 1
    assert history[0].change_type == "created"
    assert history[0].previous_value is None
    assert history[0].new_value == Decimal("12.90")
    assert history[0].changed_by == user.id


def test_register_twice_updates_in_place(db, user, competitors, make_product):
    product = make_product("Heineken 350ml")
    franco = competitors["FRANCO"]

    first = PriceRepository.register_price(db, product.id, franco.id, "5.00", acting_user_id=user.id)
    second = PriceRepository.register_price(db, product.id, franco.id, "5.50", acting_user_id=user.id)

    assert first.id == second.id
    assert db.query(Price).count() == 1
    assert second.value == Decimal("5.50")

    history = PriceHistoryRepository.get_history(db)
    assert [h.change_type for h in history] == ["updated", "created"]
    assert history[0].previous_value == Decimal("5.00")
    assert history[0].new_value == Decimal("5.50")


def test_register_same_value_still_logs_update(db, user, competitors, make_product):
    product = make_product("Skol Lata")
    dinho = competitors["DINHO"]

    PriceRepository.register_price(db, product.id, dinho.id, "3.50", acting_user_id=user.id)
    PriceRepository.register_price(db, product.id, dinho.id, "3.50", acting_user_id=user.id)

    assert PriceHistoryRepository.count(db) == 2


def test_register_unknown_product_or_competitor(db, user, competitors, make_product):
    product = make_product("Brahma")

    with pytest.raises(NotFoundError, match="Product not found"):
        PriceRepository.register_price(db, 9999, competitors["DINHO"].id, "1.00", acting_user_id=user.id)

    with pytest.raises(NotFoundError, match="Competitor not found"):
        PriceRepository.register_price(db, product.id, 9999, "1.00", acting_user_id=user.id)

    assert PriceHistoryRepository.count(db) == 0


def test_register_invalid_value_writes_nothing(db, user, competitors, make_product):
    product = make_product("Corona")

    with pytest.raises(InvalidArgumentError):
        PriceRepository.register_price(db, product.id, competitors["DINHO"].id, "12.999", acting_user_id=user.id)

    assert db.query(Price).count() == 0
    assert PriceHistoryRepository.count(db) == 0


def test_delete_price_logs_deleted_entry(db, user, competitors, make_product):
    product = make_product("Absolut 1L")
    price = PriceRepository.register_price(
        db, product.id, competitors["ADEGA_BRASIL"].id, "89.90", acting_user_id=user.id
    )

    PriceRepository.delete_price(db, price.id, acting_user_id=user.id)

    assert PriceRepository.get_by_id(db, price.id) is None
    latest = PriceHistoryRepository.get_history(db)[0]
    assert latest.change_type == "deleted"
    assert latest.previous_value == Decimal("89.90")
    assert latest.new_value is None


def test_delete_price_defaults_to_registering_user(db, user, competitors, make_product):
    product = make_product("Jack Daniels")
    price = PriceRepository.register_price(db, product.id, competitors["FRANCO"].id, "150.00", acting_user_id=user.id)

    PriceRepository.delete_price(db, price.id)

    deleted = db.query(PriceHistory).filter(PriceHistory.change_type == "deleted").one()
    assert deleted.changed_by == user.id


def test_delete_unknown_price(db):
    with pytest.raises(NotFoundError, match="Price not found"):
        PriceRepository.delete_price(db, 424242)


def test_history_replays_to_current_value(db, user, competitors, make_product):
    product = make_product("Red Bull")
    diversos = competitors["DIVERSOS"]

    for value in ["9.00", "9.50", "8.75"]:
        PriceRepository.register_price(db, product.id, diversos.id, value, acting_user_id=user.id)

    entries = list(reversed(PriceHistoryRepository.get_history(db, product_id=product.id)))
    replayed = None
    for entry in entries:
        assert entry.previous_value == replayed
        replayed = entry.new_value

    assert replayed == PriceRepository.get_current(db, product.id, diversos.id).value


def test_list_all_with_details_orders_by_product_then_competitor(db, user, competitors, make_product):
    zeta = make_product("Zeta")
    alpha = make_product("Alpha")

    PriceRepository.register_price(db, zeta.id, competitors["DINHO"].id, "1.00", acting_user_id=user.id)
    PriceRepository.register_price(db, alpha.id, competitors["DIVERSOS"].id, "2.00", acting_user_id=user.id)
    PriceRepository.register_price(db, alpha.id, competitors["DINHO"].id, "3.00", acting_user_id=user.id)

    rows = PriceRepository.list_all_with_details(db)

    assert [(r.product_name, r.competitor_code) for r in rows] == [
        ("Alpha", "DINHO"),
        ("Alpha", "DIVERSOS"),
        ("Zeta", "DINHO"),
    ]
    assert [r.competitor_code for r in PriceRepository.list_by_product(db, alpha.id)] == ["DINHO", "DIVERSOS"]


def test_concurrent_insert_retried_as_update(db, user, competitors, make_product, monkeypatch):
    product = make_product("Smirnoff Ice")
    dinho = competitors["DINHO"]
    PriceRepository.register_price(db, product.id, dinho.id, "12.90", acting_user_id=user.id)

    # The first lookup misses the row another writer just inserted
    real_get_current = PriceRepository.get_current
    calls = []

    def racing_get_current(session, product_id, competitor_id):
        calls.append(product_id)
        if len(calls) == 1:
            return None
        return real_get_current(session, product_id, competitor_id)

    monkeypatch.setattr(PriceRepository, "get_current", staticmethod(racing_get_current))

    price = PriceRepository.register_price(db, product.id, dinho.id, "11.90", acting_user_id=user.id)

    assert len(calls) == 2
    assert price.value == Decimal("11.90")
    assert db.query(Price).count() == 1

    history = PriceHistoryRepository.get_history(db, product_id=product.id)
    assert [h.change_type for h in history] == ["updated", "created"]
    assert history[0].previous_value == Decimal("12.90")
    assert history[0].new_value == Decimal("11.90")
