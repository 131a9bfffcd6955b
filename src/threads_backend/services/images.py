"""Local disk storage for uploaded profile and community images."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from urllib.parse import urlparse

from fastapi import UploadFile

from threads_backend.core.errors import InvalidInputError, NotFoundError
from threads_backend.core.settings import Settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


class ImageService:
    """Store images under a single directory with UUID file names."""

    def __init__(self, settings: Settings) -> None:
        self.storage_dir = Path(settings.image_storage_dir)
        self.base_url = settings.image_base_url
        self.max_size = settings.max_image_size_bytes

    @staticmethod
    def _extension(filename: str) -> str:
        return Path(filename).suffix.lower()

    def _validate(self, file: UploadFile) -> str:
        if not file.filename:
            raise InvalidInputError("No filename provided")
        extension = self._extension(file.filename)
        if extension not in ALLOWED_IMAGE_EXTENSIONS:
            allowed = ", ".join(sorted(ALLOWED_IMAGE_EXTENSIONS))
            raise InvalidInputError(f"Invalid file type. Allowed types: {allowed}")
        return extension

    async def upload_file(self, file: UploadFile) -> str:
        """Persist an uploaded image and return its generated file name.

        Raises:
            InvalidInputError: If the file is empty, too large or not an image.
        """
        extension = self._validate(file)
        contents = await file.read()
        await file.seek(0)

        if not contents:
            raise InvalidInputError("Empty file uploaded")
        if len(contents) > self.max_size:
            raise InvalidInputError(
                f"File size exceeds maximum allowed size of {self.max_size} bytes"
            )

        filename = f"{uuid.uuid4()}{extension}"
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        (self.storage_dir / filename).write_bytes(contents)
        logger.info("Stored image %s (%d bytes)", filename, len(contents))
        return filename

    def public_url(self, filename: str) -> str:
        """Return the URL under which a stored image is served."""
        return f"{self.base_url.rstrip('/')}/{filename}"

    def _resolve(self, name_or_url: str) -> Path | None:
        # Stored values are public URLs; only the last path segment names the file.
        name = Path(urlparse(name_or_url).path).name
        if not name:
            return None
        return self.storage_dir / name

    def delete_image(self, name_or_url: str) -> None:
        """Remove a stored image given its file name or public URL.

        Missing files and empty references are ignored.
        """
        if not name_or_url:
            return
        path = self._resolve(name_or_url)
        if path is None or not path.is_file():
            logger.debug("No stored image for %s", name_or_url)
            return
        path.unlink()
        logger.info("Deleted image %s", path.name)

    def image_path(self, filename: str) -> Path:
        """Return the on-disk path of a stored image.

        Raises:
            NotFoundError: If no such image is stored.
        """
        path = self._resolve(filename)
        if path is None or path.name != filename or not path.is_file():
            raise NotFoundError("Image not found")
        return path
