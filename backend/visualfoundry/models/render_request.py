"""Pydantic model for a validated render request."""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from motion_engine.parameters import (
    MAX_DURATION,
    MIN_DURATION,
    MotionProfile,
    frame_count as compute_frame_count,
    resolve_duration,
    resolve_motion_profile,
)
from motion_engine.sanitizer import (
    DEFAULT_ACCENT_COLOR,
    DEFAULT_TAGLINE,
    DEFAULT_TITLE,
    TAGLINE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    sanitize_color,
    sanitize_text,
)


class RenderRequest(BaseModel):
    """
    Normalized overlay and motion parameters for POST /api/render.

    Every field accepts absent or malformed input and normalizes it: text is
    sanitized, the color falls back to the default accent, the duration is
    clamped and unknown motion profiles become ``cinematic``. Instances are
    immutable.

    Attributes:
        title: Sanitized title overlay text
        tagline: Sanitized tagline overlay text
        accent_color: ``#RRGGBB`` tagline color
        duration_seconds: Output duration in [5, 20]
        motion_profile: Zoom/pan preset
    """

    title: str = Field(
        default=DEFAULT_TITLE,
        max_length=TITLE_MAX_LENGTH * 2,
        description="Title overlay text",
    )
    tagline: str = Field(
        default=DEFAULT_TAGLINE,
        max_length=TAGLINE_MAX_LENGTH * 2,
        description="Tagline overlay text",
    )
    accent_color: str = Field(
        default=DEFAULT_ACCENT_COLOR,
        alias="accentColor",
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Tagline color as #RRGGBB",
    )
    duration_seconds: float = Field(
        default=8.0,
        alias="duration",
        ge=MIN_DURATION,
        le=MAX_DURATION,
        description="Video duration in seconds",
    )
    motion_profile: MotionProfile = Field(
        default=MotionProfile.CINEMATIC,
        alias="motion",
        description="Motion preset: cinematic, pulse or pan",
    )

    model_config = {
        "populate_by_name": True,
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Launch Day",
                    "tagline": "v2",
                    "accentColor": "#ff00aa",
                    "duration": 10,
                    "motion": "pan",
                }
            ]
        },
    }

    @field_validator("title", mode="before")
    @classmethod
    def _sanitize_title(cls, value: Any) -> str:
        return sanitize_text(value, DEFAULT_TITLE, TITLE_MAX_LENGTH)

    @field_validator("tagline", mode="before")
    @classmethod
    def _sanitize_tagline(cls, value: Any) -> str:
        return sanitize_text(value, DEFAULT_TAGLINE, TAGLINE_MAX_LENGTH)

    @field_validator("accent_color", mode="before")
    @classmethod
    def _sanitize_accent_color(cls, value: Any) -> str:
        return sanitize_color(value)

    @field_validator("duration_seconds", mode="before")
    @classmethod
    def _resolve_duration(cls, value: Any) -> float:
        return resolve_duration(value)

    @field_validator("motion_profile", mode="before")
    @classmethod
    def _resolve_motion(cls, value: Any) -> MotionProfile:
        return resolve_motion_profile(value)

    @classmethod
    def from_form(
        cls,
        title: Optional[str] = None,
        tagline: Optional[str] = None,
        accent_color: Optional[str] = None,
        duration: Optional[str] = None,
        motion: Optional[str] = None,
    ) -> "RenderRequest":
        """Build a request from raw multipart form values (any may be None)."""
        return cls(
            title=title,
            tagline=tagline,
            accent_color=accent_color,
            duration_seconds=duration,
            motion_profile=motion,
        )

    @property
    def frame_count(self) -> int:
        return compute_frame_count(self.duration_seconds)
