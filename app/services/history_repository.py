"""
Repository layer for the price history (read side only; rows are written by
PriceRepository and ProductRepository and never modified).
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.models.product import Product, Competitor
from app.models.price import PriceHistory
from app.schemas.price import HistoryEntry, HistoryFilter
from app.utils.datetime_utils import days_ago

logger = logging.getLogger(__name__)


class PriceHistoryRepository:
    """Repository for PriceHistory queries"""

    @staticmethod
    def get_history(
        db: Session,
        product_id: Optional[int] = None,
        competitor_id: Optional[int] = None,
        days: Optional[int] = None,
    ) -> List[HistoryEntry]:
        """
        History entries, newest first.

        Filters are optional and combined with AND. Entries whose product or
        competitor no longer exists are still returned, without the name.
        """
        query = db.query(PriceHistory, Product.name, Competitor.name)\
            .outerjoin(Product, PriceHistory.product_id == Product.id)\
            .outerjoin(Competitor, PriceHistory.competitor_id == Competitor.id)

        if product_id is not None:
            query = query.filter(PriceHistory.product_id == product_id)

        if competitor_id is not None:
            query = query.filter(PriceHistory.competitor_id == competitor_id)

        if days is not None:
            query = query.filter(PriceHistory.changed_at >= days_ago(days))

        try:
            rows = query.order_by(PriceHistory.changed_at.desc(), PriceHistory.id.desc()).all()
        except OperationalError as e:
            db.rollback()
            logger.error(f"Error fetching price history: {e}")
            return []

        return [
            HistoryEntry(
                id=entry.id,
                product_id=entry.product_id,
                product_name=product_name,
                competitor_id=entry.competitor_id,
                competitor_name=competitor_name,
                previous_value=entry.previous_value,
                new_value=entry.new_value,
                changed_by=entry.changed_by,
                change_type=entry.change_type,
                changed_at=entry.changed_at,
            )
            for entry, product_name, competitor_name in rows
        ]

    @staticmethod
    def filter(db: Session, filters: HistoryFilter) -> List[HistoryEntry]:
        return PriceHistoryRepository.get_history(
            db,
            product_id=filters.product_id,
            competitor_id=filters.competitor_id,
            days=filters.days,
        )

    @staticmethod
    def count(db: Session) -> int:
        return db.query(PriceHistory).count()
