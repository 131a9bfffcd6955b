"""Tests for local image storage."""

from __future__ import annotations

import io

import pytest
from fastapi import UploadFile

from threads_backend.core.errors import InvalidInputError, NotFoundError


def _upload(content: bytes, filename: str) -> UploadFile:
    return UploadFile(file=io.BytesIO(content), filename=filename)


@pytest.mark.asyncio
async def test_upload_keeps_extension(image_service, image_dir) -> None:
    name = await image_service.upload_file(_upload(b"fake-jpeg", "Holiday.JPG"))

    assert name.endswith(".jpg")
    assert (image_dir / name).read_bytes() == b"fake-jpeg"
    assert image_service.public_url(name) == f"http://test/api/v1/images/{name}"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("content", "filename"),
    [
        (b"#!/bin/sh", "script.sh"),
        (b"", "empty.png"),
        (b"data", ""),
    ],
)
async def test_upload_rejects_invalid_files(image_service, content, filename) -> None:
    with pytest.raises(InvalidInputError):
        await image_service.upload_file(_upload(content, filename))


@pytest.mark.asyncio
async def test_upload_rejects_oversized_file(image_service) -> None:
    image_service.max_size = 4
    with pytest.raises(InvalidInputError):
        await image_service.upload_file(_upload(b"12345", "big.png"))


@pytest.mark.asyncio
async def test_delete_by_public_url(image_service, image_dir) -> None:
    name = await image_service.upload_file(_upload(b"png", "a.png"))

    image_service.delete_image(image_service.public_url(name))

    assert not (image_dir / name).exists()
    # Deleting something that is not stored is ignored.
    image_service.delete_image(image_service.public_url(name))
    image_service.delete_image("")


@pytest.mark.asyncio
async def test_image_path(image_service, image_dir) -> None:
    name = await image_service.upload_file(_upload(b"png", "a.png"))

    assert image_service.image_path(name) == image_dir / name
    with pytest.raises(NotFoundError):
        image_service.image_path("missing.png")
