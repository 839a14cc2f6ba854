"""
Business logic services.
"""
from image_service.services.image_upload_service import ImageUploadService

__all__ = [
    "ImageUploadService",
]
