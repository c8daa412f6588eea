"""
API Router for Product and Competitor endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.auth import get_current_user, CurrentUser
from app.core.exceptions import NotFoundError
from app.services.product_repository import ProductRepository, CompetitorRepository
from app.schemas.common import SuccessResponse, ErrorResponse
from app.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    CompetitorResponse,
)

router = APIRouter(tags=["Products & Competitors"])


# ============================================================================
# PRODUCT ENDPOINTS
# ============================================================================

@router.get("/products/", response_model=List[ProductResponse])
def list_products(
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user)
):
    """
    Get all products ordered by name.
    """
    return [ProductResponse.model_validate(p) for p in ProductRepository.get_all(db)]


@router.get("/products/categories", response_model=List[str])
def list_categories(
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user)
):
    """
    Get the distinct product categories.
    """
    return ProductRepository.get_categories(db)


@router.get("/products/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user)
):
    """
    Get a specific product by ID.
    """
    product = ProductRepository.get_by_id(db, product_id)
    if not product:
        raise NotFoundError("Product not found")
    return ProductResponse.model_validate(product)


@router.post(
    "/products/",
    response_model=SuccessResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
def create_product(
    product: ProductCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Create a new product.

    **Required fields:**
    - name: Product name (unique, non-empty)

    **Optional fields:**
    - description
    - category
    """
    db_product = ProductRepository.create(db, product, acting_user_id=current_user.id)
    return SuccessResponse(
        message=f"Product '{db_product.name}' created successfully",
        data={"id": db_product.id}
    )


@router.put("/products/{product_id}", response_model=SuccessResponse)
def update_product(
    product_id: int,
    product: ProductUpdate,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user)
):
    """
    Replace name, description and category of a product.
    """
    ProductRepository.update(db, product_id, product)
    return SuccessResponse(message=f"Product {product_id} updated successfully")


@router.delete("/products/{product_id}", response_model=SuccessResponse)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Delete a product together with its current prices.

    The price history of the product is kept.
    """
    removed = ProductRepository.delete(db, product_id, acting_user_id=current_user.id)
    return SuccessResponse(
        message=f"Product {product_id} deleted successfully",
        data={"prices_removed": removed}
    )


# ============================================================================
# COMPETITOR ENDPOINTS
# ============================================================================

@router.get("/competitors/", response_model=List[CompetitorResponse])
def list_competitors(
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user)
):
    """
    Get the four competitors in report order.
    """
    return [CompetitorResponse.model_validate(c) for c in CompetitorRepository.get_all(db)]
