"""
Pytest configuration and fixtures
"""

import io
import stat
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from motion_engine.ffmpeg_renderer import FFmpegRenderer
from visualfoundry.config import Settings
from visualfoundry.main import app
from visualfoundry.services import FileStorageManager, get_renderer, get_storage, reset_services

# Records its arguments, then writes a payload to the last one (the output path)
SUCCESS_SCRIPT = """#!/bin/sh
printf '%s\\n' "$@" > "{args_file}"
for last; do :; done
printf 'fake mp4 payload' > "$last"
"""

FAILURE_SCRIPT = """#!/bin/sh
echo "input.png: Invalid data found when processing input" >&2
exit 1
"""

HANG_SCRIPT = """#!/bin/sh
echo $$ > "{pid_file}"
exec sleep 30
"""

NO_OUTPUT_SCRIPT = """#!/bin/sh
exit 0
"""


@pytest.fixture
def client():
    """FastAPI test client fixture"""
    return TestClient(app)


@pytest.fixture
def png_bytes():
    """A small valid PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (64, 48), (200, 40, 90)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def write_script(tmp_path):
    """Factory writing an executable fake encoder script into tmp_path."""

    def _write(name: str, content: str) -> Path:
        script = tmp_path / "bin" / name
        script.parent.mkdir(parents=True, exist_ok=True)
        script.write_text(content)
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _write


@pytest.fixture
def encoder_scripts(tmp_path, write_script):
    """Fake ffmpeg binaries plus the files they report through."""
    args_file = tmp_path / "ffmpeg_args.txt"
    pid_file = tmp_path / "ffmpeg.pid"
    return {
        "success": write_script("ffmpeg-ok", SUCCESS_SCRIPT.format(args_file=args_file)),
        "failure": write_script("ffmpeg-fail", FAILURE_SCRIPT),
        "hang": write_script("ffmpeg-hang", HANG_SCRIPT.format(pid_file=pid_file)),
        "no_output": write_script("ffmpeg-empty", NO_OUTPUT_SCRIPT),
        "args_file": args_file,
        "pid_file": pid_file,
    }


@pytest.fixture
def make_settings(tmp_path):
    """Factory for isolated Settings rooted in tmp_path."""

    def _make(**overrides) -> Settings:
        values = {
            "STORAGE_PATH": str(tmp_path / "storage"),
            "FFMPEG_BINARY": "ffmpeg",
            "RENDER_TIMEOUT": 10,
            "MAX_CONCURRENT_RENDERS": 2,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def render_client(make_settings):
    """
    Factory returning a TestClient whose renderer runs the given encoder binary.

    Returns (client, storage); dependency overrides are cleared on teardown.
    """

    def _make(binary, **overrides):
        test_settings = make_settings(FFMPEG_BINARY=str(binary), **overrides)
        storage = FileStorageManager(test_settings.STORAGE_PATH)
        renderer = FFmpegRenderer(test_settings)
        app.dependency_overrides[get_renderer] = lambda: renderer
        app.dependency_overrides[get_storage] = lambda: storage
        return TestClient(app), storage

    yield _make

    app.dependency_overrides.clear()
    reset_services()
