"""
User model for database operations.
"""

from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.sql import func
from app.core.database import Base
from app.utils.datetime_utils import utc_now_naive


class User(Base):
    """
    User table model.

    Table: users
    Staff members who register prices. Every mutation records the acting user id.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=True)
    email = Column(String(320), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=True)  # bcrypt hash, NULL for the demo identity
    login_method = Column(String(64), nullable=True)
    role = Column(Enum("user", "admin", name="user_role"), default="user", nullable=False)
    created_at = Column(DateTime, default=utc_now_naive, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utc_now_naive, onupdate=utc_now_naive, server_default=func.now(), nullable=False)
    last_signed_in = Column(DateTime, default=utc_now_naive, server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
