"""
Authentication and caller-identity utilities.

Every mutation records who performed it. The identity comes from a Bearer
token when one is sent; otherwise, with MOCK_AUTH_ENABLED, the seeded demo
admin is attached to the request.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db

logger = logging.getLogger(__name__)


# HTTP Bearer token security; the header is optional so the demo flow can run without it
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Identity of the caller, passed explicitly into every mutation"""
    id: int
    email: str
    name: Optional[str] = None
    role: str = "user"


def verify_password(plain_password: str, hashed_password_in_db: str) -> bool:
    """
    Verify plain password against stored bcrypt hash in database.

    Args:
        plain_password: Plain text password from frontend
        hashed_password_in_db: Bcrypt hash stored in database

    Returns:
        True if password matches hash, False otherwise
    """
    return bcrypt.checkpw(
        plain_password.encode('utf-8'),
        hashed_password_in_db.encode('utf-8')
    )


def get_password_hash(plain_password: str) -> str:
    """
    Hash a plain password using Bcrypt (cost factor 12, salt embedded in the hash).

    Args:
        plain_password: Plain text password to hash

    Returns:
        Bcrypt hash of the password
    """
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(plain_password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token (HS256 by default).

    Args:
        data: Dictionary containing token data (sub, email, ...)
        expires_delta: Optional expiration time delta

    Returns:
        JWT token string
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(hours=settings.JWT_EXPIRATION_HOURS)

    to_encode.update({
        "exp": expire,
        "iat": now,
        "type": "access"
    })

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM
    )


def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Raises:
        HTTPException: If token is invalid or expired
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        raise credentials_exception


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> CurrentUser:
    """FastAPI dependency resolving the caller identity"""
    from app.services.user_repository import UserRepository

    if credentials is not None:
        payload = decode_access_token(credentials.credentials)
        user_id = payload.get("sub")
        user = UserRepository.get_by_id(db, int(user_id)) if user_id and str(user_id).isdigit() else None
        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token: user not found",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return CurrentUser(id=user.id, email=user.email, name=user.name, role=user.role)

    if settings.MOCK_AUTH_ENABLED:
        try:
            user = UserRepository.get_by_email(db, settings.MOCK_USER_EMAIL)
            if user is None:
                user = UserRepository.ensure_user(
                    db, email=settings.MOCK_USER_EMAIL, name=settings.MOCK_USER_NAME, role="admin"
                )
        except OperationalError as e:
            # Store unreachable: reads still answer, writes fail with "unavailable"
            db.rollback()
            logger.error(f"Could not load demo user: {e}")
            return CurrentUser(
                id=settings.MOCK_USER_ID,
                email=settings.MOCK_USER_EMAIL,
                name=settings.MOCK_USER_NAME,
                role="admin",
            )
        return CurrentUser(id=user.id, email=user.email, name=user.name, role=user.role)

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="User not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
