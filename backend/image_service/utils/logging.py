"""
Production logging utility for structured JSON logging.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- file_name
- path
- status_code
- duration_ms

Usage:
    from image_service.utils.logging import configure_logging, log_image_uploaded

    configure_logging('image-service', 'INFO')
    log_image_uploaded(logger, file_name='abc.png', path='images/abc.png', replaced=False)
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger import jsonlogger


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _service_name = None
    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.

        Args:
            service_name: Service identifier (e.g. image-service)
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return  # Already configured

        cls._service_name = service_name

        # Remove default handlers
        root_logger = logging.getLogger()
        root_logger.handlers = []

        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(level)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )

        # Console handler (for docker logs)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Add service name to all log records via filter
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True

        handler.addFilter(ServiceFilter())
        cls._configured = True


def _build_log_extra(
    event: str,
    file_name: Optional[str] = None,
    path: Optional[str] = None,
    status_code: Optional[int] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.

    Args:
        event: Event name (mandatory)
        file_name: Optional generated file name
        path: Optional remote object path
        status_code: Optional upstream HTTP status
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields

    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }

    if file_name:
        extra["file_name"] = file_name
    if path:
        extra["path"] = path
    if status_code is not None:
        extra["status_code"] = status_code
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    return extra


# Upload event functions

def log_image_uploaded(
    logger: logging.Logger,
    file_name: str,
    path: str,
    replaced: bool,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log a completed image upload.

    Args:
        logger: Logger instance
        file_name: Generated file name (required)
        path: Remote object path (required)
        replaced: Whether an existing object was overwritten
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="image_uploaded",
        file_name=file_name,
        path=path,
        duration_ms=duration_ms,
        replaced=replaced,
        **kwargs
    )

    logger.info(f"Image uploaded: {path}", extra=extra)


def log_image_upload_rejected(
    logger: logging.Logger,
    reason: str,
    content_type: Optional[str] = None,
    size_bytes: Optional[int] = None,
    **kwargs
):
    """Log an upload refused by validation."""
    extra = _build_log_extra(
        event="image_upload_rejected",
        reason=reason,
        **kwargs
    )
    if content_type:
        extra["content_type"] = content_type
    if size_bytes is not None:
        extra["size_bytes"] = size_bytes

    logger.warning(f"Image upload rejected: {reason}", extra=extra)


# GitHub event functions

def log_remote_request(
    logger: logging.Logger,
    method: str,
    path: str,
    status_code: int,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log a GitHub contents API request.

    Args:
        logger: Logger instance
        method: HTTP method (GET, PUT)
        path: Remote object path
        status_code: HTTP status returned by GitHub
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="remote_request",
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
        method=method,
        **kwargs
    )

    logger.info(f"GitHub {method} {path} -> {status_code}", extra=extra)


def log_remote_failure(
    logger: logging.Logger,
    method: str,
    path: str,
    error: str,
    status_code: Optional[int] = None,
    duration_ms: Optional[float] = None,
    include_traceback: bool = False,
    **kwargs
):
    """
    Log a failed GitHub contents API request.

    Args:
        logger: Logger instance
        method: HTTP method (required)
        path: Remote object path (required)
        error: Error message (required)
        status_code: Optional HTTP status returned by GitHub
        duration_ms: Optional duration in milliseconds
        include_traceback: Whether to include stack trace
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="remote_failure",
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
        method=method,
        error=str(error),
        **kwargs
    )

    message = f"GitHub {method} {path} failed - {error}"

    if include_traceback:
        exc_info = sys.exc_info()
        if exc_info[0] is not None:
            logger.error(message, extra=extra, exc_info=exc_info)
        else:
            logger.error(message, extra=extra)
    else:
        logger.error(message, extra=extra)


def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
