"""
Render options API endpoint.

Lists motion profiles and input limits so clients can build the render form.
"""

import logging

from fastapi import APIRouter

from motion_engine.parameters import (
    DEFAULT_DURATION,
    MAX_DURATION,
    MIN_DURATION,
    MOTION_DESCRIPTIONS,
    MotionProfile,
)
from motion_engine.sanitizer import DEFAULT_ACCENT_COLOR, TAGLINE_MAX_LENGTH, TITLE_MAX_LENGTH
from visualfoundry.config import settings
from visualfoundry.models import MotionOption, RenderOptionsResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/motions",
    response_model=RenderOptionsResponse,
    summary="List Render Options",
    description="Returns the available motion profiles and the limits applied to render input.",
)
async def list_render_options() -> RenderOptionsResponse:
    """
    List motion profiles and render input limits.

    Returns:
        RenderOptionsResponse: Profiles, duration bounds and text limits
    """
    logger.debug("Listing render options")
    return RenderOptionsResponse(
        motions=[
            MotionOption(name=profile.value, description=MOTION_DESCRIPTIONS[profile])
            for profile in MotionProfile
        ],
        defaultMotion=MotionProfile.CINEMATIC.value,
        minDuration=MIN_DURATION,
        maxDuration=MAX_DURATION,
        defaultDuration=DEFAULT_DURATION,
        defaultAccentColor=DEFAULT_ACCENT_COLOR,
        titleMaxLength=TITLE_MAX_LENGTH,
        taglineMaxLength=TAGLINE_MAX_LENGTH,
        maxUploadSize=settings.MAX_UPLOAD_SIZE,
    )
