"""
Cleanup Scheduler Service

Sweeps uploads and renders left behind by a crashed or killed process.
Requests delete their own files; this job only catches leftovers older than
FILE_TTL_HOURS. Uses APScheduler for periodic execution.
"""

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from visualfoundry.config import settings

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()

JOB_ID = "cleanup_stale_files"


def _cleanup_directories() -> list[Path]:
    return [settings.uploads_path, settings.renders_path]


async def cleanup_old_files(
    directories: Optional[Iterable[Path]] = None,
    ttl_hours: Optional[float] = None,
) -> dict:
    """
    Delete files older than the TTL from the storage directories.

    Args:
        directories: Directories to scan (default: uploads and renders)
        ttl_hours: Maximum file age in hours (default: FILE_TTL_HOURS)

    Returns:
        dict: Summary of cleanup operation with counts
    """
    directories = _cleanup_directories() if directories is None else directories
    ttl = settings.FILE_TTL_HOURS if ttl_hours is None else ttl_hours
    cutoff = datetime.now() - timedelta(hours=ttl)
    cleanup_summary = {
        "directories_scanned": 0,
        "files_deleted": 0,
        "errors": 0,
    }

    for directory in directories:
        dir_path = Path(directory)

        if not dir_path.exists():
            logger.debug(f"Cleanup directory does not exist: {directory}")
            continue

        cleanup_summary["directories_scanned"] += 1

        try:
            for entry in dir_path.iterdir():
                if not entry.is_file():
                    continue

                try:
                    modified = datetime.fromtimestamp(entry.stat().st_mtime)

                    if modified < cutoff:
                        entry.unlink()
                        cleanup_summary["files_deleted"] += 1
                        logger.info(f"Cleaned up stale file: {entry}")

                except FileNotFoundError:
                    # Deleted by its request while we were scanning
                    continue
                except OSError as e:
                    cleanup_summary["errors"] += 1
                    logger.error(f"Failed to clean up file {entry}: {e}")

        except OSError as e:
            cleanup_summary["errors"] += 1
            logger.error(f"Failed to scan directory {directory}: {e}")

    logger.info(
        f"Cleanup completed: {cleanup_summary['files_deleted']} files deleted, "
        f"{cleanup_summary['errors']} errors"
    )

    return cleanup_summary


def start_cleanup_scheduler():
    """
    Start the cleanup scheduler.

    Safe to call multiple times - will not add duplicate jobs.
    """
    if scheduler.running:
        logger.debug("Scheduler already running")
        return

    if not scheduler.get_job(JOB_ID):
        scheduler.add_job(
            cleanup_old_files,
            "interval",
            minutes=settings.CLEANUP_INTERVAL_MINUTES,
            id=JOB_ID,
            name="Cleanup stale uploads and renders",
            replace_existing=True,
        )
        logger.info(
            f"Scheduled cleanup job: every {settings.CLEANUP_INTERVAL_MINUTES} minute(s), "
            f"TTL: {settings.FILE_TTL_HOURS} hours"
        )

    scheduler.start()
    logger.info("Cleanup scheduler started")


def stop_cleanup_scheduler():
    """Stop the cleanup scheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Cleanup scheduler stopped")


def get_scheduler_status() -> dict:
    """
    Get current scheduler status.

    Returns:
        dict: Scheduler status including running state and job info
    """
    job = scheduler.get_job(JOB_ID)
    return {
        "running": scheduler.running,
        "job_scheduled": job is not None,
        "next_run": str(job.next_run_time) if job else None,
        "interval_minutes": settings.CLEANUP_INTERVAL_MINUTES,
        "ttl_hours": settings.FILE_TTL_HOURS,
    }
