"""
Comparison matrix and price averages.

The matrix is rebuilt from the store on every call: products x competitors x
current prices, folded into one row per product.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.models.price import Price
from app.services.product_repository import ProductRepository, CompetitorRepository
from app.schemas.price import ComparisonRow, CompetitorPriceCell

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def average_of(values: Iterable[Decimal]) -> Optional[str]:
    """Arithmetic mean rendered with 2 decimals, None for no values"""
    values = [Decimal(v) for v in values]
    if not values:
        return None
    mean = sum(values, Decimal("0")) / len(values)
    return str(mean.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


class PriceComparisonRepository:
    """Read-side aggregation over current prices"""

    @staticmethod
    def get_comparison_matrix(db: Session) -> List[ComparisonRow]:
        """
        One row per product ordered by name.

        Each row carries the four competitor cells in fixed order (None value
        when there is no current price), the average of the present prices
        and the latest price update time.
        """
        products = ProductRepository.get_all(db)
        competitors = CompetitorRepository.get_all(db)
        try:
            prices = db.query(Price).all()
        except OperationalError as e:
            db.rollback()
            logger.error(f"Error fetching prices for comparison: {e}")
            return []

        by_pair: Dict[Tuple[int, int], Price] = {
            (price.product_id, price.competitor_id): price for price in prices
        }

        rows = []
        for product in products:
            cells = []
            present = []
            for competitor in competitors:
                price = by_pair.get((product.id, competitor.id))
                cells.append(CompetitorPriceCell(
                    competitor_id=competitor.id,
                    competitor_code=competitor.code,
                    competitor_name=competitor.name,
                    price_id=price.id if price else None,
                    value=price.value if price else None,
                    updated_at=price.updated_at if price else None,
                ))
                if price:
                    present.append(price)

            rows.append(ComparisonRow(
                id=product.id,
                name=product.name,
                category=product.category,
                prices=cells,
                average=average_of(p.value for p in present),
                last_updated=max((p.updated_at for p in present), default=None),
            ))

        return rows

    @staticmethod
    def calculate_average_price_by_product(db: Session, product_id: int) -> Optional[str]:
        """Mean of the product's current prices, None when it has none"""
        try:
            values = [row[0] for row in db.query(Price.value).filter(Price.product_id == product_id).all()]
        except OperationalError as e:
            db.rollback()
            logger.error(f"Error fetching prices for product {product_id}: {e}")
            return None
        return average_of(values)
