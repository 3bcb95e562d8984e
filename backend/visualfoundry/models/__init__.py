"""Pydantic models for API request/response schemas."""

from .error_response import ErrorResponse
from .health_response import HealthResponse
from .motion_options import MotionOption, RenderOptionsResponse
from .render_request import RenderRequest

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "MotionOption",
    "RenderOptionsResponse",
    "RenderRequest",
]
