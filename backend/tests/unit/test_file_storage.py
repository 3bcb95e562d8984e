"""
Unit Tests for FileStorageManager

Tests file storage operations in isolation.
"""

import re
from io import BytesIO
from pathlib import Path

import pytest
from fastapi import UploadFile

from visualfoundry.services.file_storage import FileStorageManager

NAME_PATTERN = re.compile(r"^\d{13}-[a-z0-9]{6}\.png$")


@pytest.fixture
def temp_storage(tmp_path):
    """Create temporary storage directory for testing."""
    return FileStorageManager(base_path=str(tmp_path / "storage"))


def _upload(filename, content=b"fake image content"):
    return UploadFile(filename=filename, file=BytesIO(content))


@pytest.mark.asyncio
async def test_save_upload_writes_file_with_unique_name(temp_storage):
    """Test that save_upload creates the directory and a timestamped file."""
    file_path = await temp_storage.save_upload(_upload("photo.png"))

    assert file_path.parent == Path(temp_storage.uploads_path)
    assert NAME_PATTERN.match(file_path.name)
    assert file_path.read_bytes() == b"fake image content"


@pytest.mark.asyncio
async def test_save_upload_names_never_collide(temp_storage):
    paths = {await temp_storage.save_upload(_upload("photo.png")) for _ in range(20)}
    assert len(paths) == 20


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "filename, extension",
    [
        ("photo.PNG", ".png"),
        ("photo.jpeg", ".jpeg"),
        ("archive.tar.webp", ".webp"),
        ("no_extension", ".png"),
        ("evil.sh;rm -rf", ".png"),
        ("../../etc/passwd", ".png"),
        ("long.extension", ".png"),
    ],
)
async def test_save_upload_sanitizes_extension(temp_storage, filename, extension):
    file_path = await temp_storage.save_upload(_upload(filename))

    assert file_path.suffix == extension
    assert file_path.parent == Path(temp_storage.uploads_path)


def test_allocate_output_path(temp_storage):
    first = temp_storage.allocate_output_path()
    second = temp_storage.allocate_output_path()

    assert first != second
    assert first.parent == Path(temp_storage.renders_path)
    assert first.suffix == ".mp4"
    assert not first.exists()
    assert Path(temp_storage.renders_path).is_dir()


def test_remove_missing_file_returns_false(temp_storage):
    assert temp_storage.remove(temp_storage.uploads_path / "missing.png") is False


@pytest.mark.asyncio
async def test_remove_deletes_file(temp_storage):
    file_path = await temp_storage.save_upload(_upload("photo.png"))

    assert temp_storage.remove(file_path) is True
    assert not file_path.exists()
