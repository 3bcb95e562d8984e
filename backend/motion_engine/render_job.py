"""
Render job: one request's input image, filter graph and output artifact.

A job records its encoder outcome exactly once and deletes its files exactly
once, whichever exit path the request takes.
"""

import logging
import uuid
from enum import Enum
from pathlib import Path
from typing import Optional

from .filter_graph import FilterGraph

logger = logging.getLogger(__name__)


class JobOutcome(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def remove_file(path: Path) -> bool:
    """
    Best-effort file deletion.

    Failures are logged and swallowed so they never mask the result or error
    of the request being cleaned up.

    Returns:
        bool: True if a file was deleted
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning(f"Failed to delete {path}: {e}")
        return False

    logger.debug(f"Deleted {path}")
    return True


class RenderJob:
    """
    Bounded unit of work for a single render request.

    Attributes:
        id: Opaque job identifier
        input_path: Uploaded image (owned by the job)
        output_path: MP4 written by the encoder (owned by the job)
        graph: Filter graph fed to the encoder
        duration_seconds: Output duration cap
        frame_count: zoompan frame count used to build ``graph``
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        graph: FilterGraph,
        duration_seconds: float,
        frame_count: int,
        job_id: Optional[str] = None,
    ):
        self.id = job_id or uuid.uuid4().hex
        self.input_path = Path(input_path)
        self.output_path = Path(output_path)
        self.graph = graph
        self.duration_seconds = duration_seconds
        self.frame_count = frame_count
        self.outcome = JobOutcome.PENDING
        self.error_message: Optional[str] = None
        self._cleaned_up = False

    def __repr__(self) -> str:
        return f"RenderJob(id={self.id!r}, outcome={self.outcome.value!r})"

    @property
    def cleaned_up(self) -> bool:
        return self._cleaned_up

    def mark_succeeded(self) -> None:
        self._record(JobOutcome.SUCCEEDED)

    def mark_failed(self, message: str) -> None:
        self._record(JobOutcome.FAILED)
        self.error_message = message

    def _record(self, outcome: JobOutcome) -> None:
        if self.outcome is not JobOutcome.PENDING:
            raise RuntimeError(
                f"Outcome of job {self.id} already recorded as {self.outcome.value}"
            )
        self.outcome = outcome

    def cleanup(self) -> None:
        """Delete the input and output files; later calls are no-ops."""
        if self._cleaned_up:
            return
        self._cleaned_up = True

        removed = sum(remove_file(path) for path in (self.input_path, self.output_path))
        logger.info(f"Cleaned up job {self.id}: removed {removed} file(s)")
