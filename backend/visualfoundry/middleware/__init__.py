"""FastAPI middleware and request validation helpers."""

from .error_handler import (
    ErrorHandlerMiddleware,
    VisualFoundryError,
    UploadValidationError,
    ImageRequiredError,
    UnsupportedImageTypeError,
    UploadTooLargeError,
    UnreadableImageError,
    RenderFailedError,
    RenderCancelledError,
    format_error_response,
)
from .file_size_validator import validate_file_size
from .security_headers import SECURITY_HEADERS, SecurityHeadersMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "VisualFoundryError",
    "UploadValidationError",
    "ImageRequiredError",
    "UnsupportedImageTypeError",
    "UploadTooLargeError",
    "UnreadableImageError",
    "RenderFailedError",
    "RenderCancelledError",
    "format_error_response",
    "validate_file_size",
    "SECURITY_HEADERS",
    "SecurityHeadersMiddleware",
]
