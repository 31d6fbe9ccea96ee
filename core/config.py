"""Application configuration read from the environment.

Values are resolved once at import time; tests override them by patching
attributes on `Config` or by passing explicit arguments to the services.
"""

import os


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    # Persistence
    # Point WRITE_DATABASE_URL and READ_DATABASE_URL at different instances to
    # route reads to a replica; by default both use the same SQLite file.
    WRITE_DATABASE_URL = os.environ.get("WRITE_DATABASE_URL", "sqlite:///nutriguide.db")
    READ_DATABASE_URL = os.environ.get("READ_DATABASE_URL", WRITE_DATABASE_URL)

    # Plan-generation assistant (Google Gemini)
    GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY")
    GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")
    ENABLE_AI_MEAL_PLANNING = _flag("ENABLE_AI_MEAL_PLANNING", "true")
    AI_MAX_DISTINCT_DAYS = 7

    # Profile cache
    PROFILE_CACHE_TTL_SECONDS = int(os.environ.get("PROFILE_CACHE_TTL_SECONDS", "300"))

    # Logging
    LOG_DIR = os.environ.get("LOG_DIR", os.path.join(os.path.dirname(__file__), "..", "logs"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
