"""
Pydantic schemas for clients, SKUs and evidence.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


# ============================================================================
# Client Schemas
# ============================================================================

class ClientGetOrCreate(BaseModel):
    """Schema for the get-or-create client call"""
    code: str = Field(..., min_length=1, max_length=50, description="Client code (unique)")
    name: str = Field(..., min_length=1, max_length=255, description="Client name (ignored when the code exists)")


class ClientResponse(BaseModel):
    """Schema for client response"""
    id: int
    code: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ClientGetOrCreateResponse(BaseModel):
    success: bool = True
    client: ClientResponse


# ============================================================================
# SKU Schemas
# ============================================================================

class SkuCreate(BaseModel):
    """Schema for creating a SKU"""
    client_id: int
    code: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    order: int = Field(..., description="Display order within the client")


class SkuResponse(BaseModel):
    id: int
    client_id: int
    code: str
    name: str
    description: Optional[str] = None
    order: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ============================================================================
# Evidence Schemas
# ============================================================================

class EvidenceCreate(BaseModel):
    """Schema for recording uploaded evidence metadata"""
    client_id: int
    file_url: str = Field(..., min_length=1)
    file_name: str = Field(..., min_length=1, max_length=255)
    file_type: str = Field(..., min_length=1, max_length=50)
    file_size: int = Field(..., ge=0, description="Size in bytes")
    description: Optional[str] = None


class EvidenceResponse(BaseModel):
    id: int
    client_id: int
    file_url: str
    file_name: str
    file_type: str
    file_size: int
    description: Optional[str] = None
    uploaded_at: datetime

    class Config:
        from_attributes = True
