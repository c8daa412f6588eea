from datetime import timedelta
from decimal import Decimal

from app.models import PriceHistory
from app.schemas.price import HistoryFilter
from app.services.history_repository import PriceHistoryRepository
from app.utils.datetime_utils import utc_now_naive


def _add_entry(db, product_id, competitor_id, user_id, age_days, value="10.00"):
    entry = PriceHistory(
        product_id=product_id,
        competitor_id=competitor_id,
        previous_value=None,
        new_value=Decimal(value),
        changed_by=user_id,
        change_type="created",
        changed_at=utc_now_naive() - timedelta(days=age_days),
    )
    db.add(entry)
    db.commit()
    return entry


def test_days_filter_keeps_recent_entries(db, user, competitors, make_product):
    product = make_product("Campari")
    dinho = competitors["DINHO"].id
    recent = _add_entry(db, product.id, dinho, user.id, age_days=1)
    _add_entry(db, product.id, dinho, user.id, age_days=10)
    _add_entry(db, product.id, dinho, user.id, age_days=40)

    entries = PriceHistoryRepository.get_history(db, days=7)

    assert [e.id for e in entries] == [recent.id]


def test_no_filter_returns_everything_newest_first(db, user, competitors, make_product):
    product = make_product("Aperol")
    dinho = competitors["DINHO"].id
    old = _add_entry(db, product.id, dinho, user.id, age_days=40)
    mid = _add_entry(db, product.id, dinho, user.id, age_days=10)
    new = _add_entry(db, product.id, dinho, user.id, age_days=1)

    entries = PriceHistoryRepository.get_history(db)

    assert [e.id for e in entries] == [new.id, mid.id, old.id]


def test_filters_combine(db, user, competitors, make_product):
    gin = make_product("Gin Tanqueray")
    rum = make_product("Rum Bacardi")
    dinho = competitors["DINHO"].id
    franco = competitors["FRANCO"].id

    target = _add_entry(db, gin.id, franco, user.id, age_days=2)
    _add_entry(db, gin.id, dinho, user.id, age_days=2)
    _add_entry(db, rum.id, franco, user.id, age_days=2)
    _add_entry(db, gin.id, franco, user.id, age_days=30)

    entries = PriceHistoryRepository.filter(
        db, HistoryFilter(product_id=gin.id, competitor_id=franco, days=7)
    )

    assert [e.id for e in entries] == [target.id]
    assert entries[0].product_name == "Gin Tanqueray"
    assert entries[0].competitor_name == "Franco"


def test_entries_of_missing_product_keep_no_name(db, user, competitors):
    orphan = _add_entry(db, 777, competitors["DIVERSOS"].id, user.id, age_days=0)

    [entry] = PriceHistoryRepository.get_history(db)

    assert entry.id == orphan.id
    assert entry.product_name is None
    assert entry.competitor_name == "Diversos"
