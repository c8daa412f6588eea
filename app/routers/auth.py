"""
Authentication API endpoints.

Staff login with email + password, and the identity attached to the request.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.auth import create_access_token, get_current_user, CurrentUser
from app.services.user_repository import UserRepository
from app.schemas.auth import LoginRequest, LoginResponse, CurrentUserOut
from app.schemas.common import SuccessResponse

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate with email and password.

    Returns:
        JWT access token and the user (without password)

    Raises:
        HTTPException 401: If credentials are incorrect
    """
    user = UserRepository.authenticate(db, credentials.email, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email ou senha incorretos"
        )

    access_token = create_access_token({"sub": str(user.id), "email": user.email})

    return LoginResponse(
        access_token=access_token,
        user=CurrentUserOut.model_validate(user),
    )


@router.get("/me", response_model=CurrentUserOut)
def me(current_user: CurrentUser = Depends(get_current_user)):
    """Identity attached to this request."""
    return CurrentUserOut(
        id=current_user.id,
        name=current_user.name,
        email=current_user.email,
        role=current_user.role,
    )


@router.post("/logout", response_model=SuccessResponse)
def logout(current_user: CurrentUser = Depends(get_current_user)):
    """
    End the session. Tokens are stateless; the client discards its copy.
    """
    return SuccessResponse(message=f"User {current_user.email} logged out")
