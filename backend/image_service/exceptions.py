"""
Error taxonomy for the image service.

- ClientInputError: bad upload, surfaced as HTTP 400
- RemoteServiceError: GitHub call failed, surfaced as HTTP 500
"""
from typing import Optional


class ImageServiceError(Exception):
    """Base class for all image service errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientInputError(ImageServiceError):
    """The caller sent something we refuse to store."""


class FileValidationError(ClientInputError):
    """Upload failed the empty/type/size checks."""


class RemoteServiceError(ImageServiceError):
    """
    The GitHub contents API could not be reached or answered with an error.

    Attributes:
        status_code: HTTP status returned by GitHub, None for transport failures
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
