import pytest

from app.core.exceptions import StoreUnavailableError
from app.schemas.client import SkuCreate
from app.schemas.product import ProductCreate, ProductUpdate
from app.services.client_repository import ClientRepository, SkuRepository
from app.services.comparison_repository import PriceComparisonRepository
from app.services.history_repository import PriceHistoryRepository
from app.services.price_repository import PriceRepository
from app.services.product_repository import CompetitorRepository, ProductRepository


# ============================================================================
# Reads degrade to empty results
# ============================================================================

def test_reads_return_empty(dead_db):
    assert ProductRepository.get_all(dead_db) == []
    assert ProductRepository.get_categories(dead_db) == []
    assert CompetitorRepository.get_all(dead_db) == []
    assert PriceRepository.list_all_with_details(dead_db) == []
    assert PriceComparisonRepository.get_comparison_matrix(dead_db) == []
    assert PriceComparisonRepository.calculate_average_price_by_product(dead_db, 1) is None
    assert PriceHistoryRepository.get_history(dead_db, days=7) == []
    assert ClientRepository.get_all(dead_db) == []


@pytest.mark.parametrize("path", [
    "/api/products/",
    "/api/products/categories",
    "/api/competitors/",
    "/api/prices/",
    "/api/prices/comparison",
    "/api/history/",
    "/api/clients/",
])
def test_read_endpoints_answer_empty(dead_client, path):
    response = dead_client.get(path)

    assert response.status_code == 200
    assert response.json() == []


def test_mock_identity_without_store(dead_client):
    response = dead_client.get("/api/auth/me")

    assert response.status_code == 200
    assert response.json()["role"] == "admin"


# ============================================================================
# Writes fail with the "unavailable" kind
# ============================================================================

def test_price_writes_raise_unavailable(dead_db):
    with pytest.raises(StoreUnavailableError):
        PriceRepository.register_price(dead_db, 1, 1, "1.00", acting_user_id=1)

    with pytest.raises(StoreUnavailableError):
        PriceRepository.delete_price(dead_db, 1, acting_user_id=1)


def test_product_writes_raise_unavailable(dead_db):
    with pytest.raises(StoreUnavailableError):
        ProductRepository.create(dead_db, ProductCreate(name="Skol"), acting_user_id=1)

    with pytest.raises(StoreUnavailableError):
        ProductRepository.update(dead_db, 1, ProductUpdate(name="Skol"))

    with pytest.raises(StoreUnavailableError):
        ProductRepository.delete(dead_db, 1, acting_user_id=1)


def test_client_writes_raise_unavailable(dead_db):
    with pytest.raises(StoreUnavailableError):
        ClientRepository.get_or_create(dead_db, "CLI001", "Bar do Zé")

    with pytest.raises(StoreUnavailableError):
        SkuRepository.create(dead_db, SkuCreate(client_id=1, code="SKU-1", name="Skol", order=1))

    with pytest.raises(StoreUnavailableError):
        SkuRepository.delete(dead_db, 1)


def test_write_endpoints_answer_unavailable(dead_client):
    responses = [
        dead_client.post("/api/products/", json={"name": "Skol"}),
        dead_client.post("/api/prices/", json={"product_id": 1, "competitor_id": 1, "value": "1.00"}),
        dead_client.delete("/api/prices/1"),
        dead_client.post("/api/clients/get-or-create", json={"code": "CLI001", "name": "Bar"}),
    ]

    for response in responses:
        assert response.status_code == 503
        assert response.json()["error_type"] == "unavailable"


def test_single_row_read_answers_unavailable(dead_client):
    response = dead_client.get("/api/products/1")

    assert response.status_code == 503
    assert response.json()["error_type"] == "unavailable"
