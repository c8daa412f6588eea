"""
Price and PriceHistory models.
Current value per (product, competitor) plus the append-only audit trail.
"""

from sqlalchemy import Column, Integer, Numeric, DateTime, Enum, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.utils.datetime_utils import utc_now_naive


CHANGE_CREATED = "created"
CHANGE_UPDATED = "updated"
CHANGE_DELETED = "deleted"
CHANGE_TYPES = (CHANGE_CREATED, CHANGE_UPDATED, CHANGE_DELETED)


class Price(Base):
    """Price model - the single current value for a product/competitor pair"""
    __tablename__ = "prices"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    competitor_id = Column(Integer, ForeignKey("competitors.id", ondelete="CASCADE"), nullable=False, index=True)
    value = Column(Numeric(10, 2), nullable=False)  # Price with 2 decimal places
    registered_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    registered_at = Column(DateTime, default=utc_now_naive, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utc_now_naive, server_default=func.now(), nullable=False)

    # Relationships
    product = relationship("Product", back_populates="prices")
    competitor = relationship("Competitor", back_populates="prices")

    # At most one current price per pair
    __table_args__ = (
        UniqueConstraint('product_id', 'competitor_id', name='uq_price_product_competitor'),
    )

    def __repr__(self):
        return f"<Price(id={self.id}, product_id={self.product_id}, competitor_id={self.competitor_id}, value={self.value})>"


class PriceHistory(Base):
    """
    PriceHistory model - one row per price mutation, never updated or deleted.

    product_id/competitor_id carry no foreign key so the audit trail survives
    deletion of the product or competitor. new_value is NULL for deletions.
    """
    __tablename__ = "price_history"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    product_id = Column(Integer, nullable=False, index=True)
    competitor_id = Column(Integer, nullable=False, index=True)
    previous_value = Column(Numeric(10, 2), nullable=True)
    new_value = Column(Numeric(10, 2), nullable=True)
    changed_by = Column(Integer, nullable=False)
    change_type = Column(Enum(*CHANGE_TYPES, name="price_change_type"), nullable=False)
    changed_at = Column(DateTime, default=utc_now_naive, server_default=func.now(), nullable=False)

    __table_args__ = (
        Index('ix_price_history_changed_at', 'changed_at'),
    )

    def __repr__(self):
        return f"<PriceHistory(id={self.id}, type='{self.change_type}', {self.previous_value} -> {self.new_value})>"
