"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from ...core import GAME_MODES, LEADERBOARD_DEFAULT_LIMIT, PLAYER_NAME_MAX_LEN

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness probe."""

    return {"ok": True}


@router.get("/config")
def get_config() -> Dict[str, Any]:
    """Expose frontend configuration values."""

    return {
        "game_modes": list(GAME_MODES),
        "leaderboard_limit": LEADERBOARD_DEFAULT_LIMIT,
        "player_name_max_len": PLAYER_NAME_MAX_LEN,
    }


__all__ = ["router"]
