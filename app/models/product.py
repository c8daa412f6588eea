"""
Product and Competitor models.
Database models for the monitored catalogue and the fixed set of competitors.
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.utils.datetime_utils import utc_now_naive


# Seeded at initialization; this is also the column order of every comparison report.
COMPETITOR_SEED = (
    {"name": "Dinho", "code": "DINHO"},
    {"name": "Adega Brasil", "code": "ADEGA_BRASIL"},
    {"name": "Franco", "code": "FRANCO"},
    {"name": "Diversos", "code": "DIVERSOS"},
)

COMPETITOR_ORDER = tuple(c["code"] for c in COMPETITOR_SEED)


class Product(Base):
    """Product model - products monitored against the competitors"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=utc_now_naive, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utc_now_naive, onupdate=utc_now_naive, server_default=func.now(), nullable=False)

    # Relationships (history is intentionally not related: it outlives the product)
    prices = relationship("Price", back_populates="product", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}')>"


class Competitor(Base):
    """Competitor model - exactly four seeded rows, never edited through the API"""
    __tablename__ = "competitors"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    code = Column(String(20), nullable=False, unique=True)
    created_at = Column(DateTime, default=utc_now_naive, server_default=func.now(), nullable=False)

    prices = relationship("Price", back_populates="competitor", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def display_order(self) -> int:
        if self.code in COMPETITOR_ORDER:
            return COMPETITOR_ORDER.index(self.code)
        return len(COMPETITOR_ORDER)

    def __repr__(self):
        return f"<Competitor(id={self.id}, code='{self.code}')>"
