"""
Database configuration and session management.
"""

import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)


def _build_engine(database_url: str):
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    new_engine = create_engine(
        database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        connect_args=connect_args,
    )

    if database_url.startswith("sqlite"):
        @event.listens_for(new_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


engine = _build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Dependency to get a database session, closed at the end of the request.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind=None) -> None:
    """
    Create tables, seed the fixed competitors and make sure the demo user exists.

    Safe to call repeatedly: seeding is idempotent.
    """
    # Register every mapped table on Base.metadata before create_all
    import app.models  # noqa: F401
    from app.services.product_repository import CompetitorRepository
    from app.services.user_repository import UserRepository

    bind = bind or engine
    with bind.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database connection established successfully")

    Base.metadata.create_all(bind=bind)

    session = sessionmaker(autocommit=False, autoflush=False, bind=bind)()
    try:
        created = CompetitorRepository.seed(session)
        if created:
            logger.info(f"Seeded {created} competitors")
        if settings.MOCK_AUTH_ENABLED:
            UserRepository.ensure_user(
                session,
                email=settings.MOCK_USER_EMAIL,
                name=settings.MOCK_USER_NAME,
                role="admin",
            )
    finally:
        session.close()


def dispose_engine() -> None:
    """Release pooled connections at shutdown."""
    engine.dispose()
    logger.info("Database engine disposed")
