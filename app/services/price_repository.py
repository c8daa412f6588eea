"""
Repository layer for current prices.

Every mutation writes its PriceHistory row in the same transaction as the
Price row change, so the audit trail can always be replayed into the full
value timeline of a (product, competitor) pair.
"""

import logging
import re
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidArgumentError, NotFoundError, StoreUnavailableError
from app.models.product import Product, Competitor
from app.models.price import Price, PriceHistory, CHANGE_CREATED, CHANGE_UPDATED, CHANGE_DELETED
from app.schemas.price import PRICE_PATTERN, PriceDetailResponse
from app.services.product_repository import ProductRepository, CompetitorRepository
from app.utils.datetime_utils import utc_now_naive

logger = logging.getLogger(__name__)

_PRICE_RE = re.compile(PRICE_PATTERN, re.ASCII)


def parse_price_value(value: str) -> Decimal:
    """Validate a price string (non-negative, at most 2 fractional digits)"""
    if not isinstance(value, str) or not _PRICE_RE.fullmatch(value):
        raise InvalidArgumentError("Invalid price format")
    return Decimal(value)


class PriceRepository:
    """Repository for Price operations"""

    @staticmethod
    def get_by_id(db: Session, price_id: int) -> Optional[Price]:
        return db.query(Price).filter(Price.id == price_id).first()

    @staticmethod
    def get_current(db: Session, product_id: int, competitor_id: int) -> Optional[Price]:
        """The current price for a product/competitor pair"""
        return db.query(Price).filter(
            and_(
                Price.product_id == product_id,
                Price.competitor_id == competitor_id
            )
        ).first()

    @staticmethod
    def register_price(
        db: Session,
        product_id: int,
        competitor_id: int,
        value: str,
        acting_user_id: int,
        _retry: bool = True,
    ) -> Price:
        """
        Create or update the current price of a pair and log the change.

        Update path: the history row captures the previous value before the
        Price row is overwritten. Create path: the Price row is inserted, then
        a "created" history row with no previous value.
        A concurrent insert for the same pair is retried once as an update.
        """
        new_value = parse_price_value(value)
        existing = None

        try:
            if not ProductRepository.get_by_id(db, product_id):
                raise NotFoundError("Product not found")
            if not CompetitorRepository.get_by_id(db, competitor_id):
                raise NotFoundError("Competitor not found")

            existing = PriceRepository.get_current(db, product_id, competitor_id)

            if existing:
                db.add(PriceHistory(
                    product_id=product_id,
                    competitor_id=competitor_id,
                    previous_value=existing.value,
                    new_value=new_value,
                    changed_by=acting_user_id,
                    change_type=CHANGE_UPDATED,
                ))
                existing.value = new_value
                existing.registered_by = acting_user_id
                existing.updated_at = utc_now_naive()
                db_price = existing
            else:
                db_price = Price(
                    product_id=product_id,
                    competitor_id=competitor_id,
                    value=new_value,
                    registered_by=acting_user_id,
                )
                db.add(db_price)
                db.flush()
                db.add(PriceHistory(
                    product_id=product_id,
                    competitor_id=competitor_id,
                    previous_value=None,
                    new_value=new_value,
                    changed_by=acting_user_id,
                    change_type=CHANGE_CREATED,
                ))
            db.commit()
        except IntegrityError:
            db.rollback()
            if existing is None and _retry:
                logger.warning(
                    f"Concurrent insert for product {product_id} / competitor {competitor_id}, retrying as update"
                )
                return PriceRepository.register_price(
                    db, product_id, competitor_id, value, acting_user_id, _retry=False
                )
            raise
        except OperationalError as e:
            db.rollback()
            raise StoreUnavailableError(f"Database not available: {e.orig}")

        db.refresh(db_price)
        logger.info(
            f"Price {'updated' if existing else 'created'}: product {product_id}, "
            f"competitor {competitor_id}, value {new_value}, user {acting_user_id}"
        )
        return db_price

    @staticmethod
    def delete_price(db: Session, price_id: int, acting_user_id: Optional[int] = None) -> None:
        """
        Delete a current price, logging a "deleted" history row first.

        The deleted entry has no new value. Without an explicit caller the
        change is attributed to the user who registered the price.
        """
        try:
            price = PriceRepository.get_by_id(db, price_id)
            if not price:
                raise NotFoundError("Price not found")

            changed_by = acting_user_id if acting_user_id is not None else price.registered_by

            db.add(PriceHistory(
                product_id=price.product_id,
                competitor_id=price.competitor_id,
                previous_value=price.value,
                new_value=None,
                changed_by=changed_by,
                change_type=CHANGE_DELETED,
            ))
            db.flush()
            db.delete(price)
            db.commit()
        except OperationalError as e:
            db.rollback()
            raise StoreUnavailableError(f"Database not available: {e.orig}")

        logger.info(f"Price {price_id} deleted by user {changed_by}")

    # ============================================================================
    # LISTINGS
    # ============================================================================

    @staticmethod
    def list_by_product(db: Session, product_id: int) -> List[PriceDetailResponse]:
        """Current prices of one product, in competitor order"""
        return PriceRepository._list_with_details(db, product_id=product_id)

    @staticmethod
    def list_all_with_details(db: Session) -> List[PriceDetailResponse]:
        """All current prices ordered by product name, then competitor order"""
        return PriceRepository._list_with_details(db)

    @staticmethod
    def _list_with_details(db: Session, product_id: Optional[int] = None) -> List[PriceDetailResponse]:
        query = db.query(Price, Product.name, Competitor)\
            .join(Product, Price.product_id == Product.id)\
            .join(Competitor, Price.competitor_id == Competitor.id)
        if product_id is not None:
            query = query.filter(Price.product_id == product_id)

        try:
            rows = query.order_by(Product.name).all()
        except OperationalError as e:
            db.rollback()
            logger.error(f"Error fetching prices: {e}")
            return []

        rows.sort(key=lambda row: (row[1], row[2].display_order))
        return [
            PriceDetailResponse(
                id=price.id,
                product_id=price.product_id,
                competitor_id=price.competitor_id,
                value=price.value,
                registered_by=price.registered_by,
                registered_at=price.registered_at,
                updated_at=price.updated_at,
                product_name=product_name,
                competitor_name=competitor.name,
                competitor_code=competitor.code,
            )
            for price, product_name, competitor in rows
        ]
