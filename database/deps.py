"""FastAPI dependencies exposing the read/write session generators.

Plan and profile writes use `get_db_write`; report and listing routes use
`get_db_read` so reads can go to a replica when one is configured.
"""

from .database import get_read_session, get_write_session


def get_db_write():
    """Yield a write-capable DB session for FastAPI dependency injection."""
    yield from get_write_session()


def get_db_read():
    """Yield a read-only DB session for FastAPI dependency injection."""
    yield from get_read_session()
