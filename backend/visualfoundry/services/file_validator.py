"""
File Validation Service

Validates that an upload is an image before any render work is allocated.
"""

import logging
from pathlib import Path

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from visualfoundry.middleware.error_handler import (
    ImageRequiredError,
    UnreadableImageError,
    UnsupportedImageTypeError,
)

logger = logging.getLogger(__name__)


def validate_image_upload(file: UploadFile | None) -> UploadFile:
    """
    Validate presence and declared type of the uploaded image.

    Args:
        file: Multipart ``image`` field, or None when absent

    Returns:
        UploadFile: The validated upload

    Raises:
        ImageRequiredError: If no file (or an unnamed, empty part) was sent
        UnsupportedImageTypeError: If the MIME type is not ``image/*``
    """
    if file is None or not file.filename:
        logger.warning("Render request without image")
        raise ImageRequiredError()

    content_type = (file.content_type or "").lower()
    if not content_type.startswith("image/"):
        logger.warning(f"Invalid MIME type: {file.content_type} for file {file.filename}")
        raise UnsupportedImageTypeError(file.content_type)

    logger.info(f"Image type validation passed for {file.filename} ({content_type})")
    return file


def validate_image_content(file_path: Path) -> tuple[int, int]:
    """
    Verify the saved upload decodes as an image using Pillow.

    Args:
        file_path: Path to the saved upload

    Returns:
        tuple: (width, height) of the image

    Raises:
        UnreadableImageError: If the file is corrupted or not an image
    """
    try:
        with Image.open(file_path) as img:
            img.verify()
            size = img.size
    except (
        Image.DecompressionBombError,
        UnidentifiedImageError,
        OSError,
        SyntaxError,
        ValueError,
    ) as e:
        logger.error(f"Image validation failed for {file_path}: {e}")
        raise UnreadableImageError(str(e))

    if size[0] <= 0 or size[1] <= 0:
        raise UnreadableImageError(f"Invalid dimensions: {size}")

    logger.info(f"Valid image: {size[0]}x{size[1]} at {file_path}")
    return size
