"""
API Router for price endpoints: registration, deletion and the comparison matrix.
"""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.auth import get_current_user, CurrentUser
from app.services.price_repository import PriceRepository
from app.services.comparison_repository import PriceComparisonRepository
from app.schemas.common import SuccessResponse, ErrorResponse
from app.schemas.price import (
    PriceRegister,
    PriceDetailResponse,
    AverageResponse,
    ComparisonRow,
)

router = APIRouter(prefix="/prices", tags=["Prices"])


# ============================================================================
# READ ENDPOINTS
# ============================================================================

@router.get("/", response_model=List[PriceDetailResponse])
def list_all_prices(
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user)
):
    """
    Get every current price with product and competitor names.
    """
    return PriceRepository.list_all_with_details(db)


@router.get("/by-product/{product_id}", response_model=List[PriceDetailResponse])
def list_prices_by_product(
    product_id: int,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user)
):
    """
    Get the current prices of one product, in competitor order.
    """
    return PriceRepository.list_by_product(db, product_id)


@router.get("/comparison", response_model=List[ComparisonRow])
def get_comparison(
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user)
):
    """
    Get the comparison matrix: one row per product with the four competitor
    prices, the average and the last update time.
    """
    return PriceComparisonRepository.get_comparison_matrix(db)


@router.get("/average/{product_id}", response_model=AverageResponse)
def get_average(
    product_id: int,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user)
):
    """
    Get the average current price of a product (null when it has no prices).
    """
    return AverageResponse(
        product_id=product_id,
        average=PriceComparisonRepository.calculate_average_price_by_product(db, product_id)
    )


# ============================================================================
# MUTATION ENDPOINTS
# ============================================================================

@router.post("/", response_model=SuccessResponse, responses={404: {"model": ErrorResponse}})
def register_price(
    entry: PriceRegister,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Register a competitor price.

    Creates the current price of the pair or updates it; either way one
    history entry is written.

    **Required fields:**
    - product_id
    - competitor_id
    - value: decimal string with at most 2 fractional digits (e.g., 12.90)
    """
    price = PriceRepository.register_price(
        db,
        entry.product_id,
        entry.competitor_id,
        entry.value,
        acting_user_id=current_user.id,
    )
    return SuccessResponse(
        message="Price registered successfully",
        data={"id": price.id}
    )


@router.delete("/{price_id}", response_model=SuccessResponse)
def delete_price(
    price_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Delete a current price. A "deleted" history entry is written first.
    """
    PriceRepository.delete_price(db, price_id, acting_user_id=current_user.id)
    return SuccessResponse(message=f"Price {price_id} deleted successfully")
