"""Pydantic model for JSON error responses."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Error body returned instead of a video.

    A request gets either a complete MP4 or this body, never both.
    """

    error: str = Field(..., description="Human-readable error summary")
    details: Optional[Any] = Field(
        None,
        description="Diagnostic details (encoder message, limits)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"error": "Image is required"},
                {
                    "error": "Render failed",
                    "details": "input.png: Invalid data found when processing input",
                },
            ]
        }
    }
