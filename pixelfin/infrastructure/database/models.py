"""SQLAlchemy ORM models for the sql storage backend"""

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class LedgerBlob(Base):
    """Serialized value stored under a single key"""

    __tablename__ = "ledger_blob"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
