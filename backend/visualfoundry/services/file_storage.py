"""
File Storage Manager Service

Assigns unique temporary paths for uploaded images and rendered videos and
writes uploads to disk.
"""

import logging
import re
import secrets
import time
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from motion_engine.render_job import remove_file

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_EXTENSION = ".png"
OUTPUT_EXTENSION = ".mp4"

_EXTENSION_PATTERN = re.compile(r"^\.[a-z0-9]{1,5}$")
_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"


def _random_suffix(length: int) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def _safe_extension(filename: Optional[str]) -> str:
    """Extension of the client filename if it is short and alphanumeric."""
    suffix = Path(filename or "").suffix.lower()
    if _EXTENSION_PATTERN.match(suffix):
        return suffix
    return DEFAULT_IMAGE_EXTENSION


class FileStorageManager:
    """
    Manages temporary files for render requests.

    Handles:
    - Saving uploaded images under ``uploads/``
    - Allocating output paths under ``renders/``
    - Best-effort deletion

    File names are ``<epoch-ms>-<random><ext>`` so concurrent requests never
    collide.
    """

    def __init__(self, base_path: str = "/tmp/visualfoundry"):
        """
        Initialize FileStorageManager with base storage path.

        Args:
            base_path: Base directory for all storage operations
        """
        self.base_path = Path(base_path)
        self.uploads_path = self.base_path / "uploads"
        self.renders_path = self.base_path / "renders"

    def ensure_directories(self) -> None:
        """Create the upload and render directories if missing."""
        for directory in (self.uploads_path, self.renders_path):
            directory.mkdir(parents=True, exist_ok=True)

    def unique_name(self, extension: str, random_length: int = 6) -> str:
        return f"{int(time.time() * 1000)}-{_random_suffix(random_length)}{extension}"

    async def save_upload(self, file: UploadFile) -> Path:
        """
        Save an uploaded image with a unique name.

        Args:
            file: FastAPI UploadFile positioned at the start of its content

        Returns:
            Path: Full path to the saved file

        Raises:
            OSError: If directory creation or file write fails
        """
        self.ensure_directories()
        file_path = self.uploads_path / self.unique_name(_safe_extension(file.filename))

        try:
            content = await file.read()
            file_path.write_bytes(content)
        except OSError as e:
            logger.error(f"Failed to save upload to {file_path}: {e}")
            self.remove(file_path)
            raise

        logger.info(f"Saved upload {file.filename!r} to {file_path} ({len(content)} bytes)")
        return file_path

    def allocate_output_path(self) -> Path:
        """Reserve a unique path for a rendered video (the file is not created)."""
        self.ensure_directories()
        return self.renders_path / self.unique_name(OUTPUT_EXTENSION, random_length=10)

    def remove(self, path: Path) -> bool:
        """Delete ``path`` if it exists; failures are logged, never raised."""
        return remove_file(Path(path))
