from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import StorageError
from .config import DEFAULT_STORAGE_CONFIG, StorageConfig

logger = logging.getLogger(__name__)


def _clean_filename(filename: str | None) -> str:
    """Normalise separators and drop any directory part of an uploaded name."""
    if not filename:
        return ""
    return filename.replace("\\", "/").strip().rsplit("/", 1)[-1]


def _extension(filename: str) -> str | None:
    if "." not in filename:
        return None
    ext = filename.rsplit(".", 1)[1].strip().lower()
    return ext or None


class FileSystemStorage:
    """Stores uploaded files in a single directory on the local disk."""

    def __init__(self, config: StorageConfig = DEFAULT_STORAGE_CONFIG) -> None:
        self.config = config
        self.root = Path(config.location).resolve()
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Failed to create storage directory %s", self.root, exc_info=True)
            raise StorageError("Could not initialize storage location") from e
        logger.info("Storage directory initialized at %s", self.root)

    def _resolve(self, file_name: str) -> Path:
        destination = (self.root / file_name).resolve()
        if not destination.is_relative_to(self.root):
            raise StorageError("Cannot access a file outside the configured directory")
        return destination

    def store(
        self,
        data: bytes,
        content_type: str | None,
        original_filename: str | None,
        file_name: str,
    ) -> str:
        """
        Validate and write ``data`` as ``<file_name>.<ext>``.

        The extension comes from ``original_filename``. Returns the stored
        file name; raises StorageError without touching the disk when any
        check fails.
        """
        if not data:
            raise StorageError("Cannot save an empty file")

        if len(data) > self.config.max_file_size:
            max_mb = self.config.max_file_size // (1024 * 1024)
            raise StorageError(f"File too large. Max size is {max_mb}MB")

        cleaned = _clean_filename(original_filename)
        if not cleaned:
            raise StorageError("Invalid original filename")

        extension = _extension(cleaned)
        if extension is None:
            raise StorageError("Missing file extension")

        if extension not in self.config.allowed_extensions:
            raise StorageError(f"Unsupported file type: {extension}")

        if not content_type or not content_type.startswith("image/"):
            raise StorageError(f"Unsupported content type: {content_type}")

        final_name = f"{file_name}.{extension}"
        destination = self._resolve(final_name)

        try:
            destination.write_bytes(data)
        except OSError as e:
            logger.error("Failed to store file %s", final_name, exc_info=True)
            raise StorageError("Failed to store file") from e

        logger.info("Stored file: %s", final_name)
        return final_name

    def load(self, file_name: str) -> Path | None:
        """Return the stored file's path, or None if it is missing or unreadable."""
        path = self._resolve(file_name)
        if path.is_file() and os.access(path, os.R_OK):
            return path
        logger.debug("Could not read file: %s", file_name)
        return None
