"""
FastAPI router for data generation endpoints.

This package provides modular REST API endpoints for validating, previewing
and generating records, browsing the field type and preset catalogs,
generating text tokens and tracking background tasks.
"""

from fastapi import APIRouter

from .catalog_routes import router as catalog_router
from .generation_routes import router as generation_router
from .task_routes import router as task_router
from .token_routes import router as token_router

# Create main router that combines all sub-routers
router = APIRouter()

# Include all sub-routers
router.include_router(generation_router)
router.include_router(catalog_router)
router.include_router(token_router)
router.include_router(task_router)

__all__ = ["router"]
