"""
Schemas for the application.

This module exports all Pydantic models and schemas used for request/response validation.
"""

from app.schemas.common import SuccessResponse, ErrorResponse

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    CurrentUserOut,
)

from app.schemas.product import (
    # Product schemas
    ProductBase,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    # Competitor schemas
    CompetitorResponse,
)

from app.schemas.price import (
    # Price schemas
    PriceRegister,
    PriceResponse,
    PriceDetailResponse,
    AverageResponse,
    # Comparison schemas
    CompetitorPriceCell,
    ComparisonRow,
    # History schemas
    HistoryFilter,
    HistoryEntry,
)

from app.schemas.client import (
    ClientGetOrCreate,
    ClientResponse,
    ClientGetOrCreateResponse,
    SkuCreate,
    SkuResponse,
    EvidenceCreate,
    EvidenceResponse,
)

__all__ = [
    "SuccessResponse",
    "ErrorResponse",

    # Auth schemas
    "LoginRequest",
    "LoginResponse",
    "CurrentUserOut",

    # Product schemas
    "ProductBase",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "CompetitorResponse",

    # Price schemas
    "PriceRegister",
    "PriceResponse",
    "PriceDetailResponse",
    "AverageResponse",
    "CompetitorPriceCell",
    "ComparisonRow",
    "HistoryFilter",
    "HistoryEntry",

    # Client schemas
    "ClientGetOrCreate",
    "ClientResponse",
    "ClientGetOrCreateResponse",
    "SkuCreate",
    "SkuResponse",
    "EvidenceCreate",
    "EvidenceResponse",
]
