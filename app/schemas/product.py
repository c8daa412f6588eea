"""
Pydantic schemas for Product and Competitor.
Request and response models for API endpoints.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


# ============================================================================
# Product Schemas
# ============================================================================

class ProductBase(BaseModel):
    """Base schema for Product"""
    name: str = Field(..., min_length=1, max_length=255, description="Product name (unique)")
    description: Optional[str] = Field(None, description="Free text description")
    category: Optional[str] = Field(None, max_length=100, description="Category (e.g., RTD, Cerveja)")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Product name is required")
        return v

    @field_validator("description", "category")
    @classmethod
    def empty_as_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


class ProductCreate(ProductBase):
    """Schema for creating a new product"""
    pass


class ProductUpdate(ProductBase):
    """Schema for updating a product (name, description and category are replaced)"""
    pass


class ProductResponse(BaseModel):
    """Schema for product response"""
    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    created_by: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ============================================================================
# Competitor Schemas
# ============================================================================

class CompetitorResponse(BaseModel):
    """Schema for competitor response"""
    id: int
    name: str
    code: str
    created_at: datetime

    class Config:
        from_attributes = True
