"""JSON file storage backend - one file per key under a data directory"""

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from pixelfin.domain.exceptions import StorageReadError, StorageWriteError


class FileStorage:
    """Stores each key's blob in its own UTF-8 file"""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir).expanduser()

    def path_for(self, key: str) -> Path:
        # keys such as "@pixelfin/transactions/v1" must not create subdirectories
        return self.data_dir / f"{quote(key, safe='')}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def _write(self, key: str, value: str) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _remove(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)

    async def get(self, key: str) -> Optional[str]:
        try:
            return await asyncio.to_thread(self._read, key)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Unable to read {key!r}: {e}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            await asyncio.to_thread(self._write, key, value)
        except OSError as e:
            raise StorageWriteError(f"Unable to write {key!r}: {e}") from e

    async def remove(self, key: str) -> None:
        try:
            await asyncio.to_thread(self._remove, key)
        except OSError as e:
            raise StorageWriteError(f"Unable to remove {key!r}: {e}") from e
