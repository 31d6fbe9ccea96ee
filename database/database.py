"""Database helpers: engines, session factories and DB initialization.

Provides read/write session factories and an `init_db` helper that creates
the tables on startup.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.config import Config
from .models import Base

# Read/Write partitioning pattern
# Both URLs come from Config; by default they point at the same SQLite file.
WRITE_DATABASE_URL = Config.WRITE_DATABASE_URL
READ_DATABASE_URL = Config.READ_DATABASE_URL


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


# Engines
write_engine = create_engine(WRITE_DATABASE_URL, connect_args=_connect_args(WRITE_DATABASE_URL))
read_engine = create_engine(READ_DATABASE_URL, connect_args=_connect_args(READ_DATABASE_URL))

# Session factories
WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def init_db(engine=None):
    """Create all tables for the ORM models if they do not exist yet."""
    Base.metadata.create_all(bind=engine or write_engine)


# Convenience generators for dependency injection
def get_write_session():
    """Yield a write-enabled SQLAlchemy session for the request scope.

    Use this generator as a FastAPI dependency to ensure the session is
    properly closed after the request completes.
    """
    db = WriteSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_read_session():
    """Yield a read-only SQLAlchemy session for the request scope."""
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
