"""
Image endpoints.

POST /images/upload - Store an image on GitHub, return its CDN URL
GET  /images/health - Liveness marker

Errors are returned as {"error": message}:
- 400 for rejected files
- 500 for GitHub failures or anything unexpected
"""
import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from image_service.config import get_settings
from image_service.exceptions import ClientInputError, RemoteServiceError
from image_service.schemas.image import UploadRequest, ImageUploadResponse, ErrorResponse
from image_service.services.image_upload_service import ImageUploadService, MAX_FILE_SIZE

logger = logging.getLogger(__name__)

router = APIRouter()

HEALTH_MESSAGE = "Image service is running"


@lru_cache
def get_image_upload_service() -> ImageUploadService:
    """Build the upload service once from startup settings."""
    settings = get_settings()
    return ImageUploadService(
        settings.github_properties(),
        timeout=settings.github_timeout_seconds
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/upload",
    response_model=ImageUploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def upload_image(
    file: UploadFile = File(...),
    service: ImageUploadService = Depends(get_image_upload_service)
):
    """
    Upload an image (JPG, PNG or GIF, max 10MB) to the GitHub repository.

    The GitHub calls are blocking, so the workflow runs in the threadpool.
    """
    # Read at most one byte past the limit; anything longer is rejected on size
    try:
        content = await file.read(MAX_FILE_SIZE + 1)
    except OSError as e:
        logger.error(f"Failed to read upload {file.filename}: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Upload failed")

    request = UploadRequest(
        content=content,
        content_type=file.content_type,
        filename=file.filename,
        size=file.size if file.size is not None else len(content)
    )

    try:
        return await run_in_threadpool(service.upload_image, request)
    except ClientInputError as e:
        return _error(status.HTTP_400_BAD_REQUEST, e.message)
    except RemoteServiceError as e:
        logger.error(f"Error uploading to GitHub: {e.message}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, e.message)
    except Exception as e:
        logger.exception("Unexpected error during image upload")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))


@router.get("/health", response_class=PlainTextResponse)
async def health():
    """Liveness check, no dependency is contacted."""
    return HEALTH_MESSAGE
