"""
API router aggregator.
Includes all route modules.
"""
from fastapi import APIRouter
from image_service.api import images

api_router = APIRouter()

# Include route modules
api_router.include_router(images.router, prefix="/images", tags=["images"])
