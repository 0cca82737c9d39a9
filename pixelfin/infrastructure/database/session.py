"""Database engine and session factory"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from pixelfin.infrastructure.database.models import Base


def create_db_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections are shared with worker threads"""
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_recycle=3600,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Ensure the schema exists and return a session factory bound to the engine"""
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
