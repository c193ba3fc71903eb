"""API v1 router initialization."""
from fastapi import APIRouter

from .photo_analysis import router as photo_analysis_router

# Create v1 router
router = APIRouter()

# Include photo analysis endpoints
router.include_router(photo_analysis_router)
