"""
Unit Tests for Cleanup Scheduler Service

Tests the sweep of stale uploads and renders.
"""

import asyncio
import os
import time

import pytest
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from visualfoundry.services import cleanup_scheduler
from visualfoundry.services.cleanup_scheduler import (
    JOB_ID,
    cleanup_old_files,
    get_scheduler_status,
    start_cleanup_scheduler,
    stop_cleanup_scheduler,
)


@pytest.fixture
def temp_cleanup_dirs(tmp_path):
    """Create temporary directories matching the storage layout."""
    uploads_dir = tmp_path / "uploads"
    renders_dir = tmp_path / "renders"
    uploads_dir.mkdir()
    renders_dir.mkdir()
    return {"uploads": uploads_dir, "renders": renders_dir}


@pytest.fixture
def fresh_scheduler(monkeypatch):
    """Isolated scheduler bound to the current test's event loop."""
    scheduler = AsyncIOScheduler()
    monkeypatch.setattr(cleanup_scheduler, "scheduler", scheduler)
    return scheduler


def _age(path, hours):
    old_time = time.time() - hours * 3600
    os.utime(path, (old_time, old_time))


class TestCleanupOldFiles:
    """Tests for cleanup_old_files function."""

    @pytest.mark.asyncio
    async def test_cleanup_removes_old_files(self, temp_cleanup_dirs):
        """Test that files older than TTL are removed."""
        old_upload = temp_cleanup_dirs["uploads"] / "1700000000000-abc123.png"
        old_upload.write_bytes(b"png")
        _age(old_upload, 2)

        new_render = temp_cleanup_dirs["renders"] / "1700000000001-abcdef1234.mp4"
        new_render.write_bytes(b"mp4")

        result = await cleanup_old_files(temp_cleanup_dirs.values(), ttl_hours=1)

        assert not old_upload.exists()
        assert new_render.exists()
        assert result == {"directories_scanned": 2, "files_deleted": 1, "errors": 0}

    @pytest.mark.asyncio
    async def test_cleanup_handles_nonexistent_directories(self, tmp_path):
        """Test cleanup handles missing directories gracefully."""
        result = await cleanup_old_files([tmp_path / "missing"], ttl_hours=1)

        assert result == {"directories_scanned": 0, "files_deleted": 0, "errors": 0}

    @pytest.mark.asyncio
    async def test_cleanup_skips_directories(self, temp_cleanup_dirs):
        """Test cleanup only deletes files."""
        nested = temp_cleanup_dirs["uploads"] / "nested"
        nested.mkdir()
        _age(nested, 5)

        result = await cleanup_old_files([temp_cleanup_dirs["uploads"]], ttl_hours=1)

        assert nested.exists()
        assert result["files_deleted"] == 0

    @pytest.mark.asyncio
    async def test_cleanup_respects_ttl(self, temp_cleanup_dirs):
        """Test a file younger than the TTL survives."""
        recent = temp_cleanup_dirs["renders"] / "recent.mp4"
        recent.write_bytes(b"mp4")
        _age(recent, 0.5)

        result = await cleanup_old_files([temp_cleanup_dirs["renders"]], ttl_hours=1)

        assert recent.exists()
        assert result["files_deleted"] == 0

    @pytest.mark.asyncio
    async def test_cleanup_defaults_to_storage_directories(self, monkeypatch, make_settings):
        """Test the default scan targets the configured uploads and renders."""
        test_settings = make_settings(FILE_TTL_HOURS=1)
        monkeypatch.setattr(cleanup_scheduler, "settings", test_settings)
        test_settings.uploads_path.mkdir(parents=True)
        stale = test_settings.uploads_path / "stale.png"
        stale.write_bytes(b"png")
        _age(stale, 3)

        result = await cleanup_old_files()

        assert not stale.exists()
        assert result["directories_scanned"] == 1
        assert result["files_deleted"] == 1


class TestSchedulerLifecycle:
    """Tests for scheduler start/stop functions."""

    def test_get_scheduler_status_before_start(self, fresh_scheduler):
        """Test scheduler status before starting."""
        status = get_scheduler_status()

        assert status["running"] is False
        assert status["job_scheduled"] is False
        assert status["next_run"] is None

    @pytest.mark.asyncio
    async def test_start_and_stop_scheduler(self, fresh_scheduler):
        """Test the sweep job is scheduled on start and the scheduler stops cleanly."""
        start_cleanup_scheduler()
        status = get_scheduler_status()

        assert status["running"] is True
        assert status["job_scheduled"] is True
        assert status["next_run"] is not None

        stop_cleanup_scheduler()
        # Shutdown is dispatched onto the event loop
        await asyncio.sleep(0)
        assert get_scheduler_status()["running"] is False

    @pytest.mark.asyncio
    async def test_start_scheduler_idempotent(self, fresh_scheduler):
        """Test that starting scheduler multiple times adds one job."""
        start_cleanup_scheduler()
        start_cleanup_scheduler()

        assert [job.id for job in fresh_scheduler.get_jobs()] == [JOB_ID]
        stop_cleanup_scheduler()
