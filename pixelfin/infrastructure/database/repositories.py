"""Data access layer for stored ledger blobs"""

from typing import Optional

from sqlalchemy.orm import Session

from pixelfin.infrastructure.database.models import LedgerBlob


class BlobRepository:
    """Repository for key/value blobs"""

    def __init__(self, db: Session):
        self.db = db

    def get_value(self, key: str) -> Optional[str]:
        row = self.db.get(LedgerBlob, key)
        return row.value if row is not None else None

    def put_value(self, key: str, value: str) -> None:
        """Insert or replace the blob for key"""
        row = self.db.get(LedgerBlob, key)
        if row is None:
            self.db.add(LedgerBlob(key=key, value=value))
        else:
            row.value = value
        self.db.flush()

    def delete_value(self, key: str) -> None:
        row = self.db.get(LedgerBlob, key)
        if row is not None:
            self.db.delete(row)
            self.db.flush()
