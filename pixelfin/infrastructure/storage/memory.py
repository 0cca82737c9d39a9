"""In-process storage backend"""

import asyncio
from typing import Dict, Optional

from pixelfin.domain.exceptions import StorageReadError, StorageWriteError


class MemoryStorage:
    """
    Dict-backed key/value storage.

    The fail_* flags make the next calls raise, which lets callers exercise
    persistence failures without a real backend.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})
        self.fail_reads = False
        self.fail_writes = False
        self.fail_removes = False

    async def get(self, key: str) -> Optional[str]:
        await asyncio.sleep(0)
        if self.fail_reads:
            raise StorageReadError(f"Simulated read failure for {key!r}")
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.sleep(0)
        if self.fail_writes:
            raise StorageWriteError(f"Simulated write failure for {key!r}")
        self.data[key] = value

    async def remove(self, key: str) -> None:
        await asyncio.sleep(0)
        if self.fail_removes:
            raise StorageWriteError(f"Simulated remove failure for {key!r}")
        self.data.pop(key, None)
