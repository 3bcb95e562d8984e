"""
File Size Validation

Validates uploaded image size without loading the entire file into memory.
"""

import logging

from fastapi import UploadFile

from .error_handler import UploadTooLargeError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1MB chunks


async def validate_file_size(file: UploadFile, max_size: int) -> int:
    """
    Validate uploaded file size.

    Reads the file in chunks to check the size constraint, then resets the
    file pointer to the beginning for subsequent processing.

    Args:
        file: FastAPI UploadFile object
        max_size: Maximum allowed size in bytes

    Returns:
        int: Total file size in bytes

    Raises:
        UploadTooLargeError: If the file exceeds ``max_size``
    """
    size = 0

    while chunk := await file.read(CHUNK_SIZE):
        size += len(chunk)
        if size > max_size:
            logger.warning(f"File size exceeded: {size} bytes (max: {max_size})")
            raise UploadTooLargeError(max_size)

    await file.seek(0)

    logger.info(f"File size validation passed: {size} bytes")
    return size
