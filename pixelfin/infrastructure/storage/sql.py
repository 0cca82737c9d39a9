"""SQL storage backend backed by the ledger_blob table"""

import asyncio
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from pixelfin.domain.exceptions import StorageReadError, StorageWriteError
from pixelfin.infrastructure.database.repositories import BlobRepository
from pixelfin.infrastructure.database.session import create_db_engine, create_session_factory


class SqlStorage:
    """Key/value storage over SQLAlchemy; blocking calls run in a worker thread"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @classmethod
    def from_url(cls, database_url: str) -> "SqlStorage":
        return cls(create_session_factory(create_db_engine(database_url)))

    def _run(self, work: Callable[[BlobRepository], Optional[str]]) -> Optional[str]:
        db: Session = self.session_factory()
        try:
            result = work(BlobRepository(db))
            db.commit()
            return result
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    async def get(self, key: str) -> Optional[str]:
        try:
            return await asyncio.to_thread(self._run, lambda repo: repo.get_value(key))
        except SQLAlchemyError as e:
            raise StorageReadError(f"Unable to read {key!r}: {e}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            await asyncio.to_thread(self._run, lambda repo: repo.put_value(key, value))
        except SQLAlchemyError as e:
            raise StorageWriteError(f"Unable to write {key!r}: {e}") from e

    async def remove(self, key: str) -> None:
        try:
            await asyncio.to_thread(self._run, lambda repo: repo.delete_value(key))
        except SQLAlchemyError as e:
            raise StorageWriteError(f"Unable to remove {key!r}: {e}") from e
