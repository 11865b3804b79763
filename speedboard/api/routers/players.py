"""Per-player lookups and cache maintenance."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from ...cache import LocalCache
from ...core import GAME_MODES
from ...errors import StoreError, ValidationFailure
from ...services import normalize_player_name, record_to_dict
from ...store import DurableStore
from ..deps import get_cache, get_store
from .leaderboard import store_error_to_http

router = APIRouter(tags=["players"])


def _player_name(raw: Any) -> str:
    try:
        return normalize_player_name(raw)
    except ValidationFailure as exc:
        raise HTTPException(400, str(exc)) from exc


@router.get("/api/players/{player_name}/best/{game_mode}")
def get_player_best(
    player_name: str, game_mode: int, store: DurableStore = Depends(get_store)
):
    """Authoritative best for one player and mode."""

    name = _player_name(player_name)
    if game_mode not in GAME_MODES:
        raise HTTPException(400, f"Unknown game mode: {game_mode}")

    try:
        record = store.find_best(name, game_mode)
    except StoreError as exc:
        raise store_error_to_http(exc) from exc

    if record is None:
        raise HTTPException(404, "No record found")
    return record_to_dict(record)


@router.get("/api/players/{player_name}/profile")
def get_player_profile(player_name: str, cache: LocalCache = Depends(get_cache)):
    """Best cached score across all game modes."""

    return cache.profile(_player_name(player_name))


@router.get("/api/display-name")
def get_display_name(cache: LocalCache = Depends(get_cache)):
    """Display name last chosen on this client, if any."""

    return {"player_name": cache.get_display_name()}


@router.put("/api/display-name")
def set_display_name(body: Dict[str, Any], cache: LocalCache = Depends(get_cache)):
    """Remember the display name used for future submissions."""

    name = _player_name(body.get("player_name"))
    cache.set_display_name(name)
    return {"player_name": name}


@router.delete("/api/players/{player_name}/cache")
def clear_player_cache(player_name: str, cache: LocalCache = Depends(get_cache)):
    """Drop cached bests; the next submission re-reads the store."""

    name = _player_name(player_name)
    cache.clear(name)
    return {"ok": True, "player_name": name}


__all__ = ["router"]
