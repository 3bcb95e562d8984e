"""
Pydantic models describing the render options a client can choose from.
"""

from pydantic import BaseModel, Field


class MotionOption(BaseModel):
    """A selectable motion profile."""

    name: str = Field(..., description="Profile identifier sent as the 'motion' field")
    description: str = Field(..., description="What the motion looks like")


class RenderOptionsResponse(BaseModel):
    """Response model for GET /api/motions."""

    motions: list[MotionOption] = Field(..., description="Available motion profiles")
    defaultMotion: str = Field(..., description="Profile used when none is given")
    minDuration: float = Field(..., description="Shortest allowed duration in seconds")
    maxDuration: float = Field(..., description="Longest allowed duration in seconds")
    defaultDuration: float = Field(..., description="Duration used when none is given")
    defaultAccentColor: str = Field(..., description="Tagline color used when none is given")
    titleMaxLength: int = Field(..., description="Title characters kept")
    taglineMaxLength: int = Field(..., description="Tagline characters kept")
    maxUploadSize: int = Field(..., description="Maximum image size in bytes")
