"""
Renderer and storage factories used as FastAPI dependencies.

Both are process-wide singletons built from the startup settings; tests
replace them through ``app.dependency_overrides`` or ``reset_services()``.
"""

import logging

from motion_engine.ffmpeg_renderer import FFmpegRenderer
from visualfoundry.config import settings
from .file_storage import FileStorageManager

logger = logging.getLogger(__name__)

_renderer_instance: FFmpegRenderer | None = None
_storage_instance: FileStorageManager | None = None


def get_renderer() -> FFmpegRenderer:
    """
    Get the shared FFmpegRenderer.

    A single instance is kept so the encoder concurrency limit applies to
    every request in the process.
    """
    global _renderer_instance

    if _renderer_instance is None:
        _renderer_instance = FFmpegRenderer(settings)
    return _renderer_instance


def get_storage() -> FileStorageManager:
    """Get the shared FileStorageManager rooted at STORAGE_PATH."""
    global _storage_instance

    if _storage_instance is None:
        _storage_instance = FileStorageManager(settings.STORAGE_PATH)
    return _storage_instance


def reset_services() -> None:
    """
    Reset the singletons (for testing purposes).
    """
    global _renderer_instance, _storage_instance
    _renderer_instance = None
    _storage_instance = None
    logger.info("Renderer and storage singletons reset")
