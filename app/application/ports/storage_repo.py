from typing import Protocol


class StorageRepository(Protocol):
    def save_bytes(self, subdir: str, filename: str, data: bytes) -> str:
        ...

    def exists(self, path: str) -> bool:
        ...

    def read_all(self, path: str) -> bytes:
        """Raises OSError when the stored bytes cannot be read."""
        ...

    def delete(self, path: str) -> bool:
        ...
