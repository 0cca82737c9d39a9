"""Key/value persistence boundary used by the ledger store"""

from typing import Optional, Protocol

from pixelfin.config import Settings, settings as default_settings


class KeyValueStorage(Protocol):
    """
    Async key/value store holding serialized blobs.

    Implementations raise StorageReadError from get() and StorageWriteError
    from set()/remove() when the call fails.
    """

    async def get(self, key: str) -> Optional[str]:  # pragma: no cover - interface
        ...

    async def set(self, key: str, value: str) -> None:  # pragma: no cover - interface
        ...

    async def remove(self, key: str) -> None:  # pragma: no cover - interface
        ...


def build_storage(config: Settings | None = None) -> KeyValueStorage:
    """Create the storage backend named by settings.storage_backend"""
    config = config or default_settings
    backend = config.storage_backend.strip().lower()

    if backend == "memory":
        from pixelfin.infrastructure.storage.memory import MemoryStorage

        return MemoryStorage()
    if backend == "file":
        from pixelfin.infrastructure.storage.file import FileStorage

        return FileStorage(config.data_dir)
    if backend == "sql":
        from pixelfin.infrastructure.storage.sql import SqlStorage

        return SqlStorage.from_url(config.database_url)
    if backend == "http":
        from pixelfin.infrastructure.storage.http import HttpStorage

        return HttpStorage(config.storage_api_base, timeout=config.http_timeout_seconds)

    raise ValueError(f"Unknown storage backend: {config.storage_backend!r}")
