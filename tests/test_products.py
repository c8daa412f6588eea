import pytest
from pydantic import ValidationError

from app.core.exceptions import ConflictError, NotFoundError
from app.models import Price, PriceHistory
from app.schemas.product import ProductCreate, ProductUpdate
from app.services.history_repository import PriceHistoryRepository
from app.services.price_repository import PriceRepository
from app.services.product_repository import CompetitorRepository, ProductRepository


def test_competitors_seeded_in_report_order(db):
    competitors = CompetitorRepository.get_all(db)

    assert [c.code for c in competitors] == ["DINHO", "ADEGA_BRASIL", "FRANCO", "DIVERSOS"]
    assert [c.name for c in competitors] == ["Dinho", "Adega Brasil", "Franco", "Diversos"]


def test_competitor_seed_is_idempotent(db):
    assert CompetitorRepository.seed(db) == 0
    assert len(CompetitorRepository.get_all(db)) == 4


def test_create_product(db, user):
    product = ProductRepository.create(
        db, ProductCreate(name="  Smirnoff Ice  ", description="", category="RTD"), acting_user_id=user.id
    )

    assert product.name == "Smirnoff Ice"
    assert product.description is None
    assert product.category == "RTD"
    assert product.created_by == user.id


def test_blank_product_name_rejected():
    with pytest.raises(ValidationError):
        ProductCreate(name="   ")


def test_duplicate_product_name_conflicts(db, make_product):
    make_product("Heineken")

    with pytest.raises(ConflictError):
        make_product("Heineken")


def test_update_product(db, make_product):
    product = make_product("Budweiser", category="Cerveja")

    updated = ProductRepository.update(db, product.id, ProductUpdate(name="Budweiser 350ml", category="Cerveja"))

    assert updated.name == "Budweiser 350ml"
    assert ProductRepository.get_categories(db) == ["Cerveja"]


def test_update_to_existing_name_conflicts(db, make_product):
    make_product("Stella")
    other = make_product("Original")

    with pytest.raises(ConflictError):
        ProductRepository.update(db, other.id, ProductUpdate(name="Stella"))


def test_update_unknown_product(db):
    with pytest.raises(NotFoundError):
        ProductRepository.update(db, 123, ProductUpdate(name="Nada"))


def test_delete_product_removes_prices_and_keeps_history(db, user, competitors, make_product):
    product = make_product("Chandon")
    for code, value in [("DINHO", "80.00"), ("FRANCO", "85.00")]:
        PriceRepository.register_price(db, product.id, competitors[code].id, value, acting_user_id=user.id)

    removed = ProductRepository.delete(db, product.id, acting_user_id=user.id)

    assert removed == 2
    assert ProductRepository.get_by_id(db, product.id) is None
    assert db.query(Price).filter(Price.product_id == product.id).count() == 0

    history = PriceHistoryRepository.get_history(db, product_id=product.id)
    assert len(history) == 4
    assert sorted(h.change_type for h in history) == ["created", "created", "deleted", "deleted"]
    assert all(h.product_name is None for h in history)


def test_delete_unknown_product(db, user):
    with pytest.raises(NotFoundError):
        ProductRepository.delete(db, 999, acting_user_id=user.id)

    assert db.query(PriceHistory).count() == 0
