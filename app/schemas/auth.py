"""
Pydantic schemas for authentication.

These schemas are used for request/response validation.
"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    """Schema for login request."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="Plain text password")


class CurrentUserOut(BaseModel):
    """Identity attached to the request (excludes password)."""
    id: int
    name: Optional[str] = None
    email: str
    role: str

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """Schema for login response with JWT token."""
    success: bool = True
    access_token: str
    token_type: str = "bearer"
    user: CurrentUserOut
