"""
API routers for the application.
"""

from fastapi import APIRouter
from app.routers import auth, product, prices, history, export, clients

api_router = APIRouter()

# Include routers
api_router.include_router(auth.router)
api_router.include_router(product.router)  # Products & competitors
api_router.include_router(prices.router)  # Price registration & comparison matrix
api_router.include_router(history.router)  # Audit trail
api_router.include_router(export.router)  # PDF / Excel reports
api_router.include_router(clients.router)  # Clients, SKUs & evidence

__all__ = ["api_router", "auth", "product", "prices", "history", "export", "clients"]
