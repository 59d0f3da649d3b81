"""
API routers module.

This module contains all API route definitions organized by domain.
"""
from api.routers.health import router as health_router
from api.routers.health_score import router as health_score_router
from api.routers.activities import router as activities_router
from api.routers.medications import router as medications_router

__all__ = ["health_router", "health_score_router", "activities_router", "medications_router"]
