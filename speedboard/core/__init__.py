"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    CACHE_PATH,
    DATABASE_URL,
    DATABASE_WRITE_URL,
    DB_RESET,
    GAME_MODES,
    LEADERBOARD_DEFAULT_LIMIT,
    LEADERBOARD_FETCH_CAP,
    LOG_LEVEL,
    PLAYER_NAME_MAX_LEN,
    STORE_READ_TIMEOUT_SEC,
)
from .database import engine, make_engine, write_engine
from .log import configure_logging
from .time import utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "CACHE_PATH",
    "DATABASE_URL",
    "DATABASE_WRITE_URL",
    "DB_RESET",
    "GAME_MODES",
    "LEADERBOARD_DEFAULT_LIMIT",
    "LEADERBOARD_FETCH_CAP",
    "LOG_LEVEL",
    "PLAYER_NAME_MAX_LEN",
    "STORE_READ_TIMEOUT_SEC",
    "configure_logging",
    "engine",
    "make_engine",
    "utcnow",
    "write_engine",
]
