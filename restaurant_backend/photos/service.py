from __future__ import annotations

import uuid
from datetime import datetime
from pathlib import Path

from ..storage.filesystem import FileSystemStorage
from .models import Photo


class PhotoService:
    def __init__(self, storage: FileSystemStorage) -> None:
        self.storage = storage

    @property
    def max_upload_size(self) -> int:
        return self.storage.config.max_file_size

    def upload_photo(self, data: bytes, content_type: str | None, filename: str | None) -> Photo:
        photo_id = str(uuid.uuid4())
        url = self.storage.store(data, content_type, filename, photo_id)
        return Photo(url=url, upload_date=datetime.now())

    def get_photo_path(self, photo_id: str) -> Path | None:
        return self.storage.load(photo_id)
