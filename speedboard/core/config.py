"""Application settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from dotenv import load_dotenv

load_dotenv(override=False)

_PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number") from exc


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


def _parse_modes(raw: str | None) -> Tuple[int, ...]:
    items = _split_csv(raw) or ["15", "30", "60"]
    try:
        modes = tuple(sorted({int(item) for item in items}))
    except ValueError as exc:
        raise RuntimeError("GAME_MODES must be a comma-separated list of integers") from exc
    if any(mode <= 0 for mode in modes):
        raise RuntimeError("GAME_MODES must only contain positive integers")
    return modes


# Durable store --------------------------------------------------------------
_DEFAULT_DB_PATH = _PROJECT_ROOT / "data" / "speedboard.db"

DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite:///{_DEFAULT_DB_PATH}"
# Inserts and updates go through this URL; reads never need it.
DATABASE_WRITE_URL = os.getenv("DATABASE_WRITE_URL") or DATABASE_URL

STORE_READ_TIMEOUT_SEC = _env_float("STORE_READ_TIMEOUT_SEC", 15.0)
DB_RESET = _env_bool("DB_RESET", False)


# Game rules -----------------------------------------------------------------
GAME_MODES = _parse_modes(os.getenv("GAME_MODES"))
PLAYER_NAME_MAX_LEN = 40

LEADERBOARD_FETCH_CAP = _env_int("LEADERBOARD_FETCH_CAP", 1000)
LEADERBOARD_DEFAULT_LIMIT = _env_int("LEADERBOARD_DEFAULT_LIMIT", 10)


# Local cache ----------------------------------------------------------------
_cache_path_raw = os.getenv("CACHE_PATH")
CACHE_PATH: Optional[Path] = Path(_cache_path_raw) if _cache_path_raw else None


# HTTP -----------------------------------------------------------------------
# FRONTEND_ORIGIN can contain a comma-separated list for multi-domain deploys.
_frontend_origins = _split_csv(os.getenv("FRONTEND_ORIGIN"))
_additional_origins = _split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS"))

_local_dev_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

ALLOWED_CORS_ORIGINS = _unique(
    [
        *_frontend_origins,
        *_additional_origins,
        *_local_dev_origins,
    ]
)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


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
]
