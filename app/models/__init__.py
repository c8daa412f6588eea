"""
Database models for the application.
"""

from app.core.database import Base
from app.models.user import User
from app.models.product import Product, Competitor, COMPETITOR_SEED, COMPETITOR_ORDER
from app.models.price import Price, PriceHistory, CHANGE_CREATED, CHANGE_UPDATED, CHANGE_DELETED
from app.models.client import Client, Sku, Evidence

__all__ = [
    "Base",
    "User",
    "Product",
    "Competitor",
    "COMPETITOR_SEED",
    "COMPETITOR_ORDER",
    "Price",
    "PriceHistory",
    "CHANGE_CREATED",
    "CHANGE_UPDATED",
    "CHANGE_DELETED",
    "Client",
    "Sku",
    "Evidence",
]
