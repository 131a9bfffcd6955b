"""Serve stored profile and community images."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import FileResponse

from ..dependencies import ImageServiceDep

router = APIRouter(prefix="/images", tags=["images"])


@router.get("/{filename}", response_class=FileResponse)
async def get_image(filename: str, images: ImageServiceDep) -> FileResponse:
    """Return a stored image by file name."""
    return FileResponse(images.image_path(filename))
