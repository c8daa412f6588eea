#!/usr/bin/env python3
"""
Database initialization script.

Creates the tables, seeds the four competitors and the demo user, and
optionally creates (or resets the password of) the staff accounts.

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --staff --password 123456
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import settings  # noqa: E402
from app.core.database import SessionLocal, init_db, dispose_engine  # noqa: E402
from app.services.user_repository import UserRepository  # noqa: E402

logging.basicConfig(level=settings.LOG_LEVEL, format=settings.log_format)
logger = logging.getLogger("init_db")

STAFF_USERS = [
    {"email": "user1@adegamufs.com", "name": "Usuário 1", "role": "user"},
    {"email": "user2@adegamufs.com", "name": "Usuário 2", "role": "user"},
    {"email": "user3@adegamufs.com", "name": "Usuário 3", "role": "user"},
    {"email": "user4@adegamufs.com", "name": "Usuário 4", "role": "user"},
    {"email": "user5@adegamufs.com", "name": "Usuário 5", "role": "admin"},
]


def seed_staff(password: str) -> None:
    """Create the staff accounts, setting each bcrypt password"""
    db = SessionLocal()
    try:
        for staff in STAFF_USERS:
            UserRepository.ensure_user(db, password=password, **staff)
            logger.info(f"Staff user ready: {staff['email']} ({staff['role']})")
    finally:
        db.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Initialize the price monitor database")
    parser.add_argument("--staff", action="store_true", help="Create the five staff users")
    parser.add_argument(
        "--password",
        default=os.environ.get("STAFF_PASSWORD"),
        help="Password for the staff users (default: $STAFF_PASSWORD)",
    )
    args = parser.parse_args()

    logger.info(f"Initializing database at {settings.DATABASE_URL}")
    init_db()

    if args.staff:
        if not args.password:
            logger.error("--staff needs --password or STAFF_PASSWORD")
            return 1
        seed_staff(args.password)

    dispose_engine()
    logger.info("Database initialization completed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
