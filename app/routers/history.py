"""
API Router for the price history.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.auth import get_current_user, CurrentUser
from app.services.history_repository import PriceHistoryRepository
from app.schemas.price import HistoryEntry, HistoryFilter

router = APIRouter(prefix="/history", tags=["Price History"])


@router.get("/", response_model=List[HistoryEntry])
def list_history(
    db: Session = Depends(get_db),
    product_id: Optional[int] = Query(None, description="Filter by product"),
    competitor_id: Optional[int] = Query(None, description="Filter by competitor"),
    days: Optional[int] = Query(None, ge=1, description="Only changes in the last N days"),
    _: CurrentUser = Depends(get_current_user)
):
    """
    Get the price change history, newest first.

    **Query Parameters (all optional, combined with AND):**
    - product_id
    - competitor_id
    - days
    """
    filters = HistoryFilter(product_id=product_id, competitor_id=competitor_id, days=days)
    return PriceHistoryRepository.filter(db, filters)
