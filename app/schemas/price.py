"""
Pydantic schemas for prices, the comparison matrix and the price history.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional
from pydantic import BaseModel, Field


PRICE_PATTERN = r"^[0-9]+(\.[0-9]{1,2})?$"

ChangeType = Literal["created", "updated", "deleted"]


# ============================================================================
# Price Schemas
# ============================================================================

class PriceRegister(BaseModel):
    """Schema for registering (creating or updating) a competitor price"""
    product_id: int = Field(..., description="Product ID")
    competitor_id: int = Field(..., description="Competitor ID")
    value: str = Field(..., pattern=PRICE_PATTERN, description="Decimal string, at most 2 fractional digits (e.g., 12.90)")


class PriceResponse(BaseModel):
    """Schema for a current price"""
    id: int
    product_id: int
    competitor_id: int
    value: Decimal
    registered_by: int
    registered_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PriceDetailResponse(PriceResponse):
    """Current price joined with product and competitor names"""
    product_name: str
    competitor_name: str
    competitor_code: str


class AverageResponse(BaseModel):
    """Average of the current prices of one product"""
    product_id: int
    average: Optional[str] = Field(None, description="2-decimal string, null when the product has no prices")


# ============================================================================
# Comparison Schemas
# ============================================================================

class CompetitorPriceCell(BaseModel):
    """One competitor column of a comparison row"""
    competitor_id: int
    competitor_code: str
    competitor_name: str
    price_id: Optional[int] = None
    value: Optional[Decimal] = None
    updated_at: Optional[datetime] = None


class ComparisonRow(BaseModel):
    """One product of the comparison matrix"""
    id: int
    name: str
    category: Optional[str] = None
    prices: List[CompetitorPriceCell]
    average: Optional[str] = Field(None, description="2-decimal string, null when no competitor has a price")
    last_updated: Optional[datetime] = None

    def cell(self, competitor_code: str) -> Optional[CompetitorPriceCell]:
        for price_cell in self.prices:
            if price_cell.competitor_code == competitor_code:
                return price_cell
        return None


# ============================================================================
# History Schemas
# ============================================================================

class HistoryFilter(BaseModel):
    """Conjunctive filters for the price history"""
    product_id: Optional[int] = Field(None, description="Restrict to one product")
    competitor_id: Optional[int] = Field(None, description="Restrict to one competitor")
    days: Optional[int] = Field(None, ge=1, description="Only changes in the last N days")


class HistoryEntry(BaseModel):
    """One audit record of a price change"""
    id: int
    product_id: int
    product_name: Optional[str] = None
    competitor_id: int
    competitor_name: Optional[str] = None
    previous_value: Optional[Decimal] = None
    new_value: Optional[Decimal] = None
    changed_by: int
    change_type: ChangeType
    changed_at: datetime

    class Config:
        from_attributes = True
