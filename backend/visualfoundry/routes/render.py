"""
Render endpoint.

Provides POST /api/render: upload an image with overlay text and receive the
rendered MP4 in the response body.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from motion_engine.ffmpeg_renderer import FFmpegRenderer
from visualfoundry.config import settings
from visualfoundry.middleware import validate_file_size
from visualfoundry.models import ErrorResponse, RenderRequest
from visualfoundry.services import (
    CleanupFileResponse,
    FileStorageManager,
    get_renderer,
    get_storage,
    run_render_job,
)
from visualfoundry.services.file_validator import validate_image_content, validate_image_upload

logger = logging.getLogger(__name__)

router = APIRouter()

DOWNLOAD_FILENAME = "visualfoundry.mp4"


@router.post(
    "/render",
    summary="Render Motion Graphic",
    description="""
Render a short MP4 motion graphic from a still image.

The image is scaled, animated with a zoom/pan **motion** profile and overlaid
with a title and an accent-colored tagline on a translucent band.

**Form fields:**
- `image` (required): image file, max 20MB
- `title`, `tagline`: overlay text (trimmed, length-bounded)
- `accentColor`: tagline color as `#RRGGBB`
- `duration`: seconds, clamped to 5-20 (default 8)
- `motion`: `cinematic` (default), `pulse` or `pan`

Invalid optional fields fall back to defaults instead of failing.
""",
    responses={
        200: {"content": {"video/mp4": {}}, "description": "Rendered video"},
        400: {"model": ErrorResponse, "description": "Missing or invalid image"},
        500: {"model": ErrorResponse, "description": "Encoder failure"},
    },
)
async def render_motion_graphic(
    request: Request,
    image: UploadFile | None = File(None),
    title: str | None = Form(None),
    tagline: str | None = Form(None),
    accentColor: str | None = Form(None),
    duration: str | None = Form(None),
    motion: str | None = Form(None),
    renderer: FFmpegRenderer = Depends(get_renderer),
    storage: FileStorageManager = Depends(get_storage),
) -> CleanupFileResponse:
    """
    Validate the upload, render it and stream the video back.

    Input and output files are deleted after the response body is sent, or
    immediately when rendering fails.

    Raises:
        ImageRequiredError / UnsupportedImageTypeError / UploadTooLargeError /
        UnreadableImageError: 400, before any render work
        RenderFailedError: 500 with the encoder's message
    """
    upload = validate_image_upload(image)
    await validate_file_size(upload, settings.MAX_UPLOAD_SIZE)

    render_request = RenderRequest.from_form(
        title=title,
        tagline=tagline,
        accent_color=accentColor,
        duration=duration,
        motion=motion,
    )
    logger.info(
        f"Render request received: image={upload.filename}, "
        f"motion={render_request.motion_profile.value}, "
        f"duration={render_request.duration_seconds:g}s"
    )

    input_path = await storage.save_upload(upload)

    try:
        validate_image_content(input_path)
    except Exception:
        storage.remove(input_path)
        raise

    job = await run_render_job(
        renderer,
        storage,
        render_request,
        input_path,
        is_disconnected=request.is_disconnected,
    )

    return CleanupFileResponse(
        job.output_path,
        media_type="video/mp4",
        filename=DOWNLOAD_FILENAME,
        on_complete=job.cleanup,
    )
