"""
Render task: turns a validated request into an encoded video.

Builds the filter graph, runs the encoder while watching for client
disconnect, and deletes the job's files on every failure path. On success
the caller owns the job and must clean it up after streaming.
"""

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Optional

from motion_engine.exceptions import EncodeError
from motion_engine.ffmpeg_renderer import FFmpegRenderer
from motion_engine.filter_graph import PRIMARY_INPUT_PAD, build_graph
from motion_engine.parameters import motion_expression
from motion_engine.render_job import RenderJob, remove_file
from visualfoundry.middleware.error_handler import RenderCancelledError, RenderFailedError
from visualfoundry.models import RenderRequest
from .file_storage import FileStorageManager

logger = logging.getLogger(__name__)

DisconnectCheck = Callable[[], Awaitable[bool]]

# Seconds between client disconnect checks while ffmpeg runs
DISCONNECT_POLL_INTERVAL = 0.5


def create_render_job(
    renderer: FFmpegRenderer,
    storage: FileStorageManager,
    request: RenderRequest,
    input_path: Path,
) -> RenderJob:
    """Build the filter graph for ``request`` and allocate the output path."""
    frames = request.frame_count
    graph = build_graph(
        PRIMARY_INPUT_PAD,
        motion_expression(request.motion_profile, request.duration_seconds),
        request.title,
        request.tagline,
        request.accent_color,
        frames=frames,
        title_font=renderer.title_font,
        tagline_font=renderer.tagline_font,
    )
    return RenderJob(
        input_path=input_path,
        output_path=storage.allocate_output_path(),
        graph=graph,
        duration_seconds=request.duration_seconds,
        frame_count=frames,
    )


async def _wait_for_disconnect(is_disconnected: DisconnectCheck, poll_interval: float) -> None:
    while not await is_disconnected():
        await asyncio.sleep(poll_interval)


async def _execute_until_disconnect(
    renderer: FFmpegRenderer,
    job: RenderJob,
    is_disconnected: DisconnectCheck,
    poll_interval: float,
) -> None:
    render = asyncio.create_task(renderer.execute(job))
    watcher = asyncio.create_task(_wait_for_disconnect(is_disconnected, poll_interval))

    try:
        done, _ = await asyncio.wait({render, watcher}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        # Wait for the encoder to be killed and reaped before cleanup runs
        render.cancel()
        await asyncio.gather(render, return_exceptions=True)
        raise
    finally:
        watcher.cancel()

    if render in done:
        render.result()
        return

    if watcher.exception() is not None:
        logger.warning(f"Disconnect check failed for job {job.id}: {watcher.exception()}")
        await render
        return

    logger.warning(f"Client disconnected, cancelling render: job={job.id}")
    render.cancel()
    try:
        await render
    except asyncio.CancelledError:
        pass
    raise RenderCancelledError(job.id)


async def run_render_job(
    renderer: FFmpegRenderer,
    storage: FileStorageManager,
    request: RenderRequest,
    input_path: Path,
    is_disconnected: Optional[DisconnectCheck] = None,
    poll_interval: float = DISCONNECT_POLL_INTERVAL,
) -> RenderJob:
    """
    Render ``request`` from the image at ``input_path``.

    Args:
        renderer: Render executor
        storage: Storage manager allocating the output path
        request: Validated render parameters
        input_path: Saved upload, owned by the job from here on
        is_disconnected: Coroutine reporting client disconnect; when given,
            a disconnect cancels the encoder
        poll_interval: Seconds between disconnect checks

    Returns:
        RenderJob: Succeeded job whose output is ready to stream

    Raises:
        RenderFailedError: The encoder failed (files already deleted)
        RenderCancelledError: The client disconnected (files already deleted)
    """
    try:
        job = create_render_job(renderer, storage, request, input_path)
    except Exception:
        remove_file(Path(input_path))
        raise

    logger.info(
        f"Render job created: job={job.id}, motion={request.motion_profile.value}, "
        f"duration={request.duration_seconds:g}s"
    )

    try:
        if is_disconnected is None:
            await renderer.execute(job)
        else:
            await _execute_until_disconnect(renderer, job, is_disconnected, poll_interval)

    except EncodeError as e:
        job.cleanup()
        raise RenderFailedError(e.details or e.message)

    except BaseException:
        job.cleanup()
        raise

    logger.info(f"Render job complete: {job.id} -> {job.output_path}")
    return job
