"""
Repository layer for Product and Competitor operations.
Handles all database queries and operations for the monitored catalogue.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, StoreUnavailableError
from app.models.product import Product, Competitor, COMPETITOR_SEED
from app.models.price import Price, PriceHistory, CHANGE_DELETED
from app.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductRepository:
    """Repository for Product operations"""

    @staticmethod
    def create(db: Session, product: ProductCreate, acting_user_id: int) -> Product:
        """Create a new product; the name must be unique"""
        try:
            existing = db.query(Product).filter(Product.name == product.name).first()
            if existing:
                raise ConflictError("Product with this name already exists")

            db_product = Product(**product.model_dump(), created_by=acting_user_id)
            db.add(db_product)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("Product with this name already exists")
        except OperationalError as e:
            db.rollback()
            raise StoreUnavailableError(f"Database not available: {e.orig}")

        db.refresh(db_product)
        logger.info(f"Product {db_product.id} '{db_product.name}' created by user {acting_user_id}")
        return db_product

    @staticmethod
    def get_by_id(db: Session, product_id: int) -> Optional[Product]:
        """Get product by ID"""
        return db.query(Product).filter(Product.id == product_id).first()

    @staticmethod
    def get_all(db: Session) -> List[Product]:
        """Get all products ordered by name; empty when the store is unreachable"""
        try:
            return db.query(Product).order_by(Product.name).all()
        except OperationalError as e:
            db.rollback()
            logger.error(f"Error fetching products: {e}")
            return []

    @staticmethod
    def update(db: Session, product_id: int, product_update: ProductUpdate) -> Product:
        """Replace name, description and category"""
        try:
            db_product = ProductRepository.get_by_id(db, product_id)
            if not db_product:
                raise NotFoundError("Product not found")

            duplicate = db.query(Product).filter(
                Product.name == product_update.name,
                Product.id != product_id,
            ).first()
            if duplicate:
                raise ConflictError("Product with this name already exists")

            for field, value in product_update.model_dump().items():
                setattr(db_product, field, value)

            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("Product with this name already exists")
        except OperationalError as e:
            db.rollback()
            raise StoreUnavailableError(f"Database not available: {e.orig}")

        db.refresh(db_product)
        return db_product

    @staticmethod
    def delete(db: Session, product_id: int, acting_user_id: int) -> int:
        """
        Delete a product and its current prices.

        Each removed price gets a "deleted" history row; existing history rows
        are left untouched. Returns the number of prices removed.
        """
        try:
            db_product = ProductRepository.get_by_id(db, product_id)
            if not db_product:
                raise NotFoundError("Product not found")

            current_prices = db.query(Price).filter(Price.product_id == product_id).all()
            for price in current_prices:
                db.add(PriceHistory(
                    product_id=price.product_id,
                    competitor_id=price.competitor_id,
                    previous_value=price.value,
                    new_value=None,
                    changed_by=acting_user_id,
                    change_type=CHANGE_DELETED,
                ))
                db.delete(price)
            db.delete(db_product)
            db.commit()
        except OperationalError as e:
            db.rollback()
            raise StoreUnavailableError(f"Database not available: {e.orig}")

        logger.info(f"Product {product_id} deleted with {len(current_prices)} prices by user {acting_user_id}")
        return len(current_prices)

    @staticmethod
    def get_categories(db: Session) -> List[str]:
        """Get all unique product categories"""
        try:
            rows = db.query(Product.category).filter(Product.category.isnot(None))\
                .distinct().order_by(Product.category).all()
        except OperationalError as e:
            db.rollback()
            logger.error(f"Error fetching categories: {e}")
            return []
        return [row[0] for row in rows]


class CompetitorRepository:
    """Repository for the fixed competitor set"""

    @staticmethod
    def seed(db: Session) -> int:
        """Insert any missing seed competitor; returns how many were created"""
        created = 0
        for data in COMPETITOR_SEED:
            existing = db.query(Competitor).filter(Competitor.code == data["code"]).first()
            if existing:
                continue
            db.add(Competitor(**data))
            created += 1
        db.commit()
        return created

    @staticmethod
    def get_by_id(db: Session, competitor_id: int) -> Optional[Competitor]:
        return db.query(Competitor).filter(Competitor.id == competitor_id).first()

    @staticmethod
    def get_all(db: Session) -> List[Competitor]:
        """All competitors in the fixed report order (Dinho, Adega Brasil, Franco, Diversos)"""
        try:
            competitors = db.query(Competitor).all()
        except OperationalError as e:
            db.rollback()
            logger.error(f"Error fetching competitors: {e}")
            return []
        return sorted(competitors, key=lambda c: (c.display_order, c.name))
