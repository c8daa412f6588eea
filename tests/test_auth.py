import pytest
from fastapi import HTTPException

from app.core.auth import create_access_token, decode_access_token, get_password_hash, verify_password
from app.core.config import settings
from app.services.user_repository import UserRepository


def test_password_hash_roundtrip():
    hashed = get_password_hash("123456")

    assert hashed != "123456"
    assert verify_password("123456", hashed)
    assert not verify_password("654321", hashed)


def test_token_carries_subject():
    payload = decode_access_token(create_access_token({"sub": "7"}))

    assert payload["sub"] == "7"
    assert payload["type"] == "access"


def test_invalid_token_rejected():
    with pytest.raises(HTTPException) as exc_info:
        decode_access_token("not-a-token")

    assert exc_info.value.status_code == 401


def test_login_and_me(client, db):
    UserRepository.ensure_user(db, email="user1@adegamufs.com", name="Usuário 1", password="123456")

    response = client.post("/api/auth/login", json={"email": "user1@adegamufs.com", "password": "123456"})
    assert response.status_code == 200
    body = response.json()
    assert body["user"]["email"] == "user1@adegamufs.com"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.json()["email"] == "user1@adegamufs.com"


def test_login_wrong_password(client, db):
    UserRepository.ensure_user(db, email="user2@adegamufs.com", password="123456")

    response = client.post("/api/auth/login", json={"email": "user2@adegamufs.com", "password": "errada"})

    assert response.status_code == 401


def test_mock_identity_without_token(client):
    me = client.get("/api/auth/me").json()

    assert me["email"] == settings.MOCK_USER_EMAIL
    assert me["role"] == "admin"


def test_mutations_record_token_user(client, db):
    staff = UserRepository.ensure_user(db, email="user3@adegamufs.com", password="123456")
    token = create_access_token({"sub": str(staff.id)})

    response = client.post(
        "/api/products/", json={"name": "Cachaça 51"}, headers={"Authorization": f"Bearer {token}"}
    )
    product_id = response.json()["data"]["id"]

    assert client.get(f"/api/products/{product_id}").json()["created_by"] == staff.id


def test_no_identity_when_mock_disabled(client, monkeypatch):
    monkeypatch.setattr(settings, "MOCK_AUTH_ENABLED", False)

    assert client.get("/api/auth/me").status_code == 401


def test_logout(client):
    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json()["success"] is True
