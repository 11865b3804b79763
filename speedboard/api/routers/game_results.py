"""Game result submission endpoint."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from ...errors import ValidationFailure
from ...services import Reconciler, validate_result
from ..deps import get_reconciler

router = APIRouter(tags=["game-results"])


@router.post("/api/game-results")
def submit_game_result(
    body: Dict[str, Any], reconciler: Reconciler = Depends(get_reconciler)
):
    """Record a finished game if it beats the player's stored best."""

    try:
        result = validate_result(body)
    except ValidationFailure as exc:
        raise HTTPException(400, str(exc)) from exc

    outcome = reconciler.submit(result)
    if not outcome.accepted:
        return JSONResponse(outcome.to_dict(), status_code=500)
    return outcome.to_dict()


__all__ = ["router"]
