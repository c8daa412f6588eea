"""
Repository layer for users.
Backs the acting-user identity recorded on every mutation and the login flow.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.auth import get_password_hash, verify_password
from app.models.user import User
from app.utils.datetime_utils import utc_now_naive

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User operations"""

    @staticmethod
    def get_by_id(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def ensure_user(
        db: Session,
        email: str,
        name: Optional[str] = None,
        password: Optional[str] = None,
        role: str = "user",
    ) -> User:
        """
        Return the user with this email, creating it if absent.

        When a password is given it replaces the stored hash, so seeding can
        also reset staff credentials.
        """
        user = UserRepository.get_by_email(db, email)
        if user is None:
            user = User(
                email=email,
                name=name,
                role=role,
                login_method="email" if password else "local",
            )
            db.add(user)
            logger.info(f"Created user {email} ({role})")

        if password:
            user.password = get_password_hash(password)

        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> Optional[User]:
        """Verify credentials and stamp last_signed_in; None when they don't match."""
        user = UserRepository.get_by_email(db, email)
        if not user or not user.password:
            return None

        if not verify_password(password, user.password):
            return None

        user.last_signed_in = utc_now_naive()
        db.commit()
        db.refresh(user)
        return user
