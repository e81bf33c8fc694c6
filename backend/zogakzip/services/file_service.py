"""
Zogakzip Backend — Image Storage Service
==========================================

What:  Stores uploaded images on disk and resolves them for serving.
How:   Writes the raw bytes with aiofiles under a timestamp-based name,
       returns the public URL (`/uploads/<name>`).
Who:   Called by the /api/image route and the /uploads file route.

Upload Rules:
    - Exactly one file field is required; nothing else is validated
      (no content-type, size or format checks).
    - File name = current epoch milliseconds + the original extension.
      Two uploads in the same millisecond with the same extension collide;
      the later write wins.
    - The upload directory is created on first use.

Directory Structure:
    uploads/
    ├── 1718000000000.jpg
    └── 1718000000123.png
"""

import logging
import time
from pathlib import Path
from typing import Optional

import aiofiles

from zogakzip.config import settings
from zogakzip.exceptions import FileStorageError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class FileService:
    """
    Manages the upload directory.

    Lifecycle of an uploaded file:
        1. Client sends multipart upload with an `image` field → store_image()
        2. Name is generated from the clock and the original extension
        3. Bytes are written asynchronously
        4. `/uploads/<name>` is returned and later served by resolve()
    """

    def __init__(self, upload_dir: Optional[str] = None, url_prefix: Optional[str] = None):
        """
        Args:
            upload_dir: Override the default upload path (used in tests).
            url_prefix: Override the public URL prefix.
        """
        self.upload_dir = Path(upload_dir or settings.upload_dir).resolve()
        self.url_prefix = url_prefix or settings.upload_url_prefix

    def generate_filename(self, original_name: Optional[str]) -> str:
        extension = Path(original_name or "").suffix
        return f"{int(time.time() * 1000)}{extension}"

    async def store_image(self, filename: Optional[str], content: bytes) -> str:
        """
        Write an uploaded image and return its public URL.

        Raises:
            FileStorageError if directory creation or file write fails.
        """
        stored_name = self.generate_filename(filename)
        absolute_path = self.upload_dir / stored_name

        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store file at %s: %s", absolute_path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(absolute_path), "os_error": str(e)},
            )

        logger.info("Image stored: %s (%d bytes)", stored_name, len(content))
        return f"{self.url_prefix}/{stored_name}"

    def resolve(self, file_path: str) -> Path:
        """
        Map a path below the upload URL prefix to a file on disk.

        Raises:
            ValidationError: the path escapes the upload directory (../)
            NotFoundError: no such file
        """
        full_path = (self.upload_dir / file_path).resolve()
        if not full_path.is_relative_to(self.upload_dir):
            raise ValidationError(message="Invalid file path", field="path")
        if not full_path.is_file():
            raise NotFoundError(resource="file", resource_id=file_path)
        return full_path


# ── Singleton Instance ────────────────────────────────────────────────────
file_service = FileService()
