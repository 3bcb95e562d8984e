"""
ffmpeg subprocess orchestration for motion graphic renders.

Runs the encoder as an asyncio subprocess and suspends until it exits,
bounded by a concurrency limit and a timeout. A cancelled render kills its
encoder process.
"""

import asyncio
import logging
import time
from pathlib import Path

import psutil

from visualfoundry.config import Settings
from .exceptions import EncodeError, EncodeTimeoutError
from .render_job import RenderJob

logger = logging.getLogger(__name__)

# Lines of ffmpeg stderr kept in error details
STDERR_TAIL_LINES = 12

OUTPUT_OPTIONS = [
    "-c:v", "libx264",
    "-preset", "veryfast",
    "-movflags", "+faststart",
    "-pix_fmt", "yuv420p",
]


def _stderr_tail(stderr: bytes) -> str:
    lines = stderr.decode("utf-8", errors="replace").strip().splitlines()
    return "\n".join(lines[-STDERR_TAIL_LINES:])


def _default_concurrency() -> int:
    return psutil.cpu_count(logical=True) or 1


class FFmpegRenderer:
    """
    Render executor driving the external ffmpeg binary.

    Args:
        settings: Application settings (binary path, timeout, concurrency)
    """

    def __init__(self, settings: Settings):
        self.binary = settings.FFMPEG_BINARY
        self.timeout = settings.RENDER_TIMEOUT
        self.title_font = settings.TITLE_FONT_FILE
        self.tagline_font = settings.TAGLINE_FONT_FILE
        self.max_concurrent = settings.MAX_CONCURRENT_RENDERS or _default_concurrency()
        self._slots = asyncio.Semaphore(self.max_concurrent)
        logger.info(
            f"FFmpegRenderer initialized: binary={self.binary}, "
            f"timeout={self.timeout}s, max_concurrent={self.max_concurrent}"
        )

    def build_command(self, job: RenderJob) -> list[str]:
        """Assemble the ffmpeg argument vector for ``job``."""
        return [
            self.binary,
            "-hide_banner",
            "-nostdin",
            "-y",
            "-loop", "1",
            "-i", str(job.input_path),
            "-filter_complex", job.graph.describe(),
            "-map", f"[{job.graph.output_pad}]",
            "-t", f"{job.duration_seconds:g}",
            *OUTPUT_OPTIONS,
            str(job.output_path),
        ]

    async def execute(self, job: RenderJob) -> Path:
        """
        Encode ``job`` and return its output path.

        Waits for a free encoder slot, then for the process to exit. The
        outcome is recorded on the job.

        Raises:
            EncodeError: ffmpeg is missing, exits non-zero, produces no
                output, or exceeds the timeout (EncodeTimeoutError)
        """
        async with self._slots:
            try:
                await self._run(job)
            except EncodeError as e:
                job.mark_failed(e.message)
                raise

        job.mark_succeeded()
        return job.output_path

    async def _run(self, job: RenderJob) -> None:
        command = self.build_command(job)
        logger.info(
            f"Starting ffmpeg render: job={job.id}, duration={job.duration_seconds:g}s, "
            f"frames={job.frame_count}"
        )
        logger.debug(f"ffmpeg filter graph: {command[command.index('-filter_complex') + 1]}")

        start_time = time.monotonic()
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            logger.error(f"ffmpeg binary not found at {self.binary}")
            raise EncodeError(
                "Encoder unavailable",
                details=f"ffmpeg binary not found at {self.binary}",
            )
        except OSError as e:
            logger.error(f"Failed to start ffmpeg: {e}")
            raise EncodeError("Encoder unavailable", details=str(e))

        try:
            _, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"ffmpeg timeout after {self.timeout}s: job={job.id}")
            await self._kill(process)
            raise EncodeTimeoutError(self.timeout)
        except asyncio.CancelledError:
            logger.warning(f"Render cancelled, killing ffmpeg: job={job.id}")
            await self._kill(process)
            raise

        elapsed = time.monotonic() - start_time

        if process.returncode != 0:
            details = _stderr_tail(stderr) or f"ffmpeg exited with code {process.returncode}"
            logger.error(
                f"ffmpeg failed: job={job.id}, returncode={process.returncode}\n{details}"
            )
            raise EncodeError("Render failed", details=details)

        self._verify_output(job.output_path)
        logger.info(f"Render completed in {elapsed:.2f} seconds: job={job.id}")

    async def _kill(self, process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
        await process.wait()

    def _verify_output(self, output_path: Path) -> None:
        if not output_path.exists():
            logger.error(f"Output file does not exist: {output_path}")
            raise EncodeError("Render failed", details="ffmpeg produced no output file")

        if output_path.stat().st_size == 0:
            logger.error(f"Output file is empty: {output_path}")
            raise EncodeError("Render failed", details="ffmpeg produced an empty output file")

    async def probe(self) -> str | None:
        """
        Return the first line of ``ffmpeg -version``, or None if unavailable.
        """
        try:
            process = await asyncio.create_subprocess_exec(
                self.binary,
                "-version",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            logger.error(f"ffmpeg binary validation failed: {e}")
            return None

        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout=10)
        except asyncio.TimeoutError:
            logger.error("ffmpeg binary validation timed out")
            await self._kill(process)
            return None

        if process.returncode != 0:
            return None

        lines = stdout.decode("utf-8", errors="replace").splitlines()
        return lines[0] if lines else None
