"""Database engines and session helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from sqlalchemy.engine import Engine
from sqlmodel import create_engine

from .config import DATABASE_URL, DATABASE_WRITE_URL, STORE_READ_TIMEOUT_SEC


def _ensure_sqlite_dir(url: str) -> None:
    prefix = "sqlite:///"
    if not url.startswith(prefix) or url == f"{prefix}:memory:":
        return
    Path(url[len(prefix):]).parent.mkdir(parents=True, exist_ok=True)


def connect_args_for(url: str, timeout: float) -> Dict[str, Any]:
    """Driver options that stop a single statement from blocking forever.

    SQLite waits at most ``timeout`` seconds for a locked database;
    PostgreSQL aborts connection attempts and statements past the bound.
    """

    if url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": timeout}
    if url.startswith("postgresql"):
        return {
            "connect_timeout": max(1, int(timeout)),
            "options": f"-c statement_timeout={int(timeout * 1000)}",
        }
    return {}


def make_engine(url: str, timeout: float = STORE_READ_TIMEOUT_SEC) -> Engine:
    """Create an engine whose connections and statements are time-bounded."""

    _ensure_sqlite_dir(url)
    kwargs: Dict[str, Any] = {"connect_args": connect_args_for(url, timeout)}
    if not url.startswith("sqlite"):
        kwargs["pool_timeout"] = timeout
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


engine = make_engine(DATABASE_URL)
# Shares the read engine unless a separate privileged URL is configured.
write_engine = engine if DATABASE_WRITE_URL == DATABASE_URL else make_engine(DATABASE_WRITE_URL)


__all__ = ["connect_args_for", "engine", "make_engine", "write_engine"]
