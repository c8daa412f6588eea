"""
Shared response schemas.
"""

from typing import Optional
from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Generic success response"""
    success: bool = True
    message: str
    data: Optional[dict] = None


class ErrorResponse(BaseModel):
    """Error body produced for every application error"""
    detail: str
    error_type: str
