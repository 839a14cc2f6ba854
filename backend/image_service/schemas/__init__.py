"""
Pydantic schemas for API request/response validation.
"""
from image_service.schemas.image import (
    UploadRequest,
    ImageUploadResponse,
    ErrorResponse,
)

__all__ = [
    "UploadRequest",
    "ImageUploadResponse",
    "ErrorResponse",
]
