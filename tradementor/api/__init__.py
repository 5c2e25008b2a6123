"""
TradeMentor API package initialization.

This package contains FastAPI router modules:
- patterns: Insights, trend, emotion performance and dashboard analysis
"""

from fastapi import APIRouter

from tradementor.api.patterns import router as patterns_router

# Create main API router
api_router = APIRouter()
api_router.include_router(patterns_router)  # patterns router has its own prefix

__all__ = [
    "api_router",
    "patterns_router",
]
