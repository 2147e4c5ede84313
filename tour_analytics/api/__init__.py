"""API router aggregator."""

from fastapi import APIRouter

from .analytics import get_analytics_service, router as analytics_router
from .vouchers import router as vouchers_router

api_router = APIRouter()
api_router.include_router(analytics_router, prefix="/api", tags=["analytics"])
api_router.include_router(vouchers_router, prefix="/api", tags=["vouchers"])

__all__ = ["api_router", "get_analytics_service"]
