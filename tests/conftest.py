"""Shared test fixtures."""

import os

# Keep the app from touching a real database file at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_INIT_DB", "false")

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db, init_db
from app.models import Product, User
from app.schemas.product import ProductCreate
from app.services.product_repository import CompetitorRepository, ProductRepository
from app.services.user_repository import UserRepository
from main import app as fastapi_app


SQLITE_TEST_URL = "sqlite://"


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory SQLite database per test, tables created and competitors seeded."""
    engine = create_engine(
        SQLITE_TEST_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    init_db(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine: Engine) -> Generator[Session, None, None]:
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def user(db: Session) -> User:
    return UserRepository.ensure_user(db, email="tester@adegamufs.com", name="Tester")


@pytest.fixture
def competitors(db: Session) -> dict:
    """Seeded competitors keyed by code"""
    return {c.code: c for c in CompetitorRepository.get_all(db)}


@pytest.fixture
def make_product(db: Session, user: User):
    def _make(name: str, category: str = None) -> Product:
        return ProductRepository.create(db, ProductCreate(name=name, category=category), acting_user_id=user.id)
    return _make


@pytest.fixture
def test_app(db: Session) -> Generator[FastAPI, None, None]:
    """FastAPI app with get_db bound to the test session."""

    def override_get_db() -> Generator[Session, None, None]:
        yield db

    fastapi_app.dependency_overrides[get_db] = override_get_db

    yield fastapi_app

    fastapi_app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def client(test_app: FastAPI) -> TestClient:
    """TestClient without entering the lifespan (the test database is already initialized)"""
    return TestClient(test_app)


@pytest.fixture
def dead_db() -> Generator[Session, None, None]:
    """Session on a database file that cannot be opened: every query raises OperationalError."""
    engine = create_engine("sqlite:////nonexistent-dir/price_monitor.db")
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def dead_client(dead_db: Session) -> Generator[TestClient, None, None]:
    """TestClient whose requests all hit the unreachable database."""

    def override_get_db() -> Generator[Session, None, None]:
        yield dead_db

    fastapi_app.dependency_overrides[get_db] = override_get_db

    yield TestClient(fastapi_app)

    fastapi_app.dependency_overrides.pop(get_db, None)
