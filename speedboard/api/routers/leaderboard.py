"""Leaderboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ...core import GAME_MODES, LEADERBOARD_DEFAULT_LIMIT
from ...errors import StoreError, StoreTimeout
from ...services import Ranker, record_to_dict
from ..deps import get_ranker

router = APIRouter(tags=["leaderboard"])


def store_error_to_http(exc: StoreError) -> HTTPException:
    """Map a store error to a distinguishable HTTP error."""

    if isinstance(exc, StoreTimeout):
        return HTTPException(503, {"error": "timeout", "message": str(exc)})
    return HTTPException(502, {"error": "store_failure", "message": str(exc)})


@router.get("/api/leaderboard/{game_mode}")
def get_leaderboard(
    game_mode: int,
    limit: int = Query(LEADERBOARD_DEFAULT_LIMIT, ge=1, le=100),
    ranker: Ranker = Depends(get_ranker),
):
    """Get the ranked leaderboard for a game mode."""

    if game_mode not in GAME_MODES:
        raise HTTPException(400, f"Unknown game mode: {game_mode}")

    try:
        records = ranker.rank(game_mode, limit)
    except StoreError as exc:
        raise store_error_to_http(exc) from exc

    return {
        "game_mode": game_mode,
        "entries": [
            {"position": position, **record_to_dict(record)}
            for position, record in enumerate(records, start=1)
        ],
    }


__all__ = ["router", "store_error_to_http"]
