"""
Centralized error handling middleware for FastAPI.

Provides consistent ``{"error", "details"}`` responses and logging for all
API routes.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class VisualFoundryError(Exception):
    """Base exception for errors reported to the client."""

    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class UploadValidationError(VisualFoundryError):
    """Raised when the uploaded image is missing or unusable."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message=message, status_code=400, details=details)


class ImageRequiredError(UploadValidationError):
    """Raised when the request carries no image."""

    def __init__(self):
        super().__init__(message="Image is required")


class UnsupportedImageTypeError(UploadValidationError):
    """Raised when the upload is not declared as an image."""

    def __init__(self, content_type: str | None):
        super().__init__(
            message="Only image uploads are supported",
            details={"content_type": content_type},
        )


class UploadTooLargeError(UploadValidationError):
    """Raised when the upload exceeds the configured size limit."""

    def __init__(self, max_size: int):
        super().__init__(
            message="Image exceeds upload limit",
            details={"max_bytes": max_size},
        )


class UnreadableImageError(UploadValidationError):
    """Raised when the upload cannot be decoded as an image."""

    def __init__(self, reason: str):
        super().__init__(
            message="Uploaded file is not a readable image",
            details=reason,
        )


class RenderFailedError(VisualFoundryError):
    """Raised when the encoder fails; details carry its diagnostic message."""

    def __init__(self, details: str | None):
        super().__init__(message="Render failed", status_code=500, details=details)


class RenderCancelledError(VisualFoundryError):
    """Raised when the client disconnects before the render finishes."""

    def __init__(self, job_id: str):
        super().__init__(
            message="Render cancelled",
            status_code=499,
            details={"job_id": job_id},
        )


def format_error_response(message: str, details: Any = None) -> dict:
    """
    Format a consistent error body.

    Args:
        message: Human-readable error message
        details: Additional error details (omitted when empty)

    Returns:
        dict: ``{"error": message}`` plus ``details`` when present
    """
    response = {"error": message}
    if details:
        response["details"] = details
    return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches unhandled exceptions and returns consistent error responses.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response

        except VisualFoundryError as e:
            log = logger.warning if e.status_code < 500 else logger.error
            log(
                f"{type(e).__name__}: {e.message}",
                extra={"status_code": e.status_code, "details": e.details},
            )
            return JSONResponse(
                status_code=e.status_code,
                content=format_error_response(e.message, e.details),
            )

        except Exception as e:
            # Log full stack trace for unexpected errors
            logger.exception(f"Unhandled exception: {str(e)}")
            return JSONResponse(
                status_code=500,
                content=format_error_response("Unexpected error", str(e)),
            )
