import os
from datetime import datetime
from typing import Optional

from ...core.config import settings
from ...application.ports.storage_repo import StorageRepository


class LocalStorageRepository(StorageRepository):
    """Local filesystem storage. Saves files under settings.UPLOAD_DIR."""

    def __init__(self, upload_dir: Optional[str] = None) -> None:
        self.upload_dir = upload_dir or settings.UPLOAD_DIR

    def save_bytes(self, subdir: str, filename: str, data: bytes) -> str:
        timestamped = f"{int(datetime.utcnow().timestamp()*1000)}_{os.path.basename(filename)}"
        dest_dir = os.path.join(self.upload_dir, subdir) if subdir else self.upload_dir
        os.makedirs(dest_dir, exist_ok=True)
        path = os.path.join(dest_dir, timestamped)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def read_all(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def delete(self, path: str) -> bool:
        if not os.path.isfile(path):
            return False
        os.remove(path)
        return True
