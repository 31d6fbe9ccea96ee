"""Persistence for profiles, diet plans and water logs.

`init_db` creates the tables; the session factories and request-scoped
generators come in a write and a read flavor.
"""

from .database import (
    ReadSessionLocal,
    WriteSessionLocal,
    get_read_session,
    get_write_session,
    init_db,
    read_engine,
    write_engine,
)
from . import models
from .models import Base, DietPlan, Profile, WaterLog

__all__ = [
    "Base",
    "DietPlan",
    "Profile",
    "WaterLog",
    "ReadSessionLocal",
    "WriteSessionLocal",
    "get_read_session",
    "get_write_session",
    "init_db",
    "read_engine",
    "write_engine",
    "models",
]
