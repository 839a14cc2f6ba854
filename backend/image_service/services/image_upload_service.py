"""
Image upload service.

Stores product images in a GitHub repository and returns a jsDelivr URL.

Flow:
1. Validate the upload (empty, type, size)
2. Generate a unique path: images/{uuid}.{ext}
3. Look up the path on GitHub to get the current sha, if any
4. Commit the base64 content (with the sha when overwriting)
5. Build the CDN URL for the stored file

Every path is freshly random, so step 3 finds nothing in practice and
`replaced` is always False. The lookup is kept so an overwrite still
works if a path ever repeats.
"""
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Optional

import httpx

from image_service.config import GitHubProperties
from image_service.exceptions import FileValidationError, RemoteServiceError
from image_service.schemas.image import UploadRequest, ImageUploadResponse
from image_service.storage.cdn import build_cdn_url
from image_service.storage.github_client import GitHubContentsClient
from image_service.utils.logging import log_image_uploaded, log_image_upload_rejected
from image_service.utils.metrics import image_uploads_total

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = ["image/jpeg", "image/png", "image/gif"]
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
DEFAULT_EXTENSION = ".jpg"
IMAGES_FOLDER = "images"
SUCCESS_MESSAGE = "Image uploaded successfully"


@dataclass(frozen=True)
class RemoteObjectName:
    """Generated file name and its repository path."""
    file_name: str
    path: str


class ImageUploadService:
    """
    Service for uploading images to GitHub.

    Responsibilities:
    - Validate uploads
    - Generate unique repository paths
    - Commit files through the contents API
    - Build public CDN URLs
    """

    def __init__(
        self,
        properties: GitHubProperties,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Args:
            properties: GitHub coordinates, built once at startup
            timeout: GitHub request timeout in seconds
            transport: Optional httpx transport override (tests)
        """
        self.properties = properties
        self.timeout = timeout
        self._transport = transport

    @staticmethod
    def validate_file(content: bytes, content_type: Optional[str], size: int) -> None:
        """
        Reject empty, non-image or oversized uploads.

        Checks run in order and the first failure wins.

        Raises:
            FileValidationError: with a client-facing message
        """
        if not content:
            raise FileValidationError("File is empty")
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise FileValidationError("Invalid file type. Allowed: JPG, PNG, GIF")
        if size > MAX_FILE_SIZE:
            raise FileValidationError("File size exceeds limit of 10MB")

    @staticmethod
    def get_extension(original_filename: Optional[str]) -> str:
        """
        Get the extension (with the dot) from the last '.' of the filename.

        Falls back to .jpg when there is no filename or no dot.
        """
        if original_filename and "." in original_filename:
            return original_filename[original_filename.rindex("."):]
        return DEFAULT_EXTENSION

    @staticmethod
    def generate_remote_name(original_filename: Optional[str]) -> RemoteObjectName:
        """
        Generate a unique name for the upload.

        Pattern: images/{uuid}{ext}

        No lookup is done here; uniqueness comes from the UUID.
        """
        file_name = f"{uuid.uuid4()}{ImageUploadService.get_extension(original_filename)}"
        return RemoteObjectName(file_name=file_name, path=f"{IMAGES_FOLDER}/{file_name}")

    def cdn_url(self, path: str) -> str:
        """Public jsDelivr URL for a path in the configured repository."""
        p = self.properties
        return build_cdn_url(p.owner, p.repo, p.branch, path)

    def upload_image(self, request: UploadRequest) -> ImageUploadResponse:
        """
        Validate and store one image.

        Args:
            request: The uploaded file

        Returns:
            ImageUploadResponse with the CDN URL and generated file name

        Raises:
            FileValidationError: upload rejected, no GitHub call made
            RemoteServiceError: lookup or commit failed
        """
        try:
            self.validate_file(request.content, request.content_type, request.size)
        except FileValidationError as e:
            image_uploads_total.labels(result="rejected").inc()
            log_image_upload_rejected(
                logger,
                reason=e.message,
                content_type=request.content_type,
                size_bytes=request.size
            )
            raise

        start_time = time.time()
        name = self.generate_remote_name(request.filename)

        with GitHubContentsClient(self.properties, self.timeout, self._transport) as client:
            logger.info(f"Uploading image to GitHub: {client.contents_url(name.path)}")
            try:
                existing = client.get_existing(name.path)
                client.put_file(
                    name.path,
                    request.content,
                    message=f"Upload image {name.file_name}",
                    branch=self.properties.branch,
                    sha=existing.sha
                )
            except RemoteServiceError:
                image_uploads_total.labels(result="failed").inc()
                raise

        image_uploads_total.labels(result="success").inc()
        log_image_uploaded(
            logger,
            file_name=name.file_name,
            path=name.path,
            replaced=existing.exists,
            duration_ms=(time.time() - start_time) * 1000
        )

        return ImageUploadResponse(
            url=self.cdn_url(name.path),
            file_name=name.file_name,
            message=SUCCESS_MESSAGE,
            replaced=existing.exists
        )
