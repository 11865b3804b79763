"""FastAPI dependencies resolving the components attached to the app."""

from __future__ import annotations

from fastapi import Request

from ..cache import LocalCache
from ..services import Ranker, Reconciler
from ..store import DurableStore


def get_store(request: Request) -> DurableStore:
    return request.app.state.store


def get_cache(request: Request) -> LocalCache:
    return request.app.state.cache


def get_reconciler(request: Request) -> Reconciler:
    return request.app.state.reconciler


def get_ranker(request: Request) -> Ranker:
    return request.app.state.ranker


__all__ = ["get_cache", "get_ranker", "get_reconciler", "get_store"]
