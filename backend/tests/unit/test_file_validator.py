"""
Unit Tests for image upload validation
"""

from io import BytesIO

import pytest
from fastapi import UploadFile
from PIL import Image
from starlette.datastructures import Headers

from visualfoundry.middleware import (
    ImageRequiredError,
    UnreadableImageError,
    UnsupportedImageTypeError,
)
from visualfoundry.services.file_validator import validate_image_content, validate_image_upload


def _upload(filename, content_type, content=b"data"):
    return UploadFile(
        filename=filename,
        file=BytesIO(content),
        headers=Headers({"content-type": content_type}),
    )


def test_missing_image_is_rejected():
    with pytest.raises(ImageRequiredError) as exc_info:
        validate_image_upload(None)

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Image is required"


def test_unnamed_part_is_rejected():
    with pytest.raises(ImageRequiredError):
        validate_image_upload(_upload("", "image/png"))


@pytest.mark.parametrize("content_type", ["text/plain", "application/pdf", "video/mp4", ""])
def test_non_image_type_is_rejected(content_type):
    with pytest.raises(UnsupportedImageTypeError) as exc_info:
        validate_image_upload(_upload("file.bin", content_type))

    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("content_type", ["image/png", "image/jpeg", "IMAGE/WEBP"])
def test_image_type_is_accepted(content_type):
    upload = _upload("photo", content_type)
    assert validate_image_upload(upload) is upload


def test_valid_image_content(tmp_path, png_bytes):
    path = tmp_path / "photo.png"
    path.write_bytes(png_bytes)

    assert validate_image_content(path) == (64, 48)


def test_corrupted_image_content(tmp_path):
    path = tmp_path / "photo.png"
    path.write_bytes(b"definitely not a png")

    with pytest.raises(UnreadableImageError) as exc_info:
        validate_image_content(path)

    assert exc_info.value.status_code == 400




def test_decompression_bomb_is_rejected(tmp_path, png_bytes, monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
    path = tmp_path / "photo.png"
    path.write_bytes(png_bytes)

    with pytest.raises(UnreadableImageError) as exc_info:
        validate_image_content(path)

    assert exc_info.value.status_code == 400
    assert "decompression bomb" in exc_info.value.details
