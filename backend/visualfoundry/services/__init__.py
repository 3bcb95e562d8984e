"""Service layer for storage, validation and render lifecycle."""

from .cleanup_response import CleanupFileResponse
from .file_storage import FileStorageManager
from .renderer_factory import get_renderer, get_storage, reset_services
from .render_task import run_render_job

__all__ = [
    "CleanupFileResponse",
    "FileStorageManager",
    "get_renderer",
    "get_storage",
    "reset_services",
    "run_render_job",
]
