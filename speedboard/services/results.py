"""Helpers for serialising stored results."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..models import BestRecord


def _iso(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat() + "Z"


def record_to_dict(record: BestRecord) -> Dict[str, Any]:
    """Serialise a stored best to its public leaderboard shape."""

    return {
        "id": record.id,
        "player_name": record.player_name,
        "score": record.score,
        "lps": record.lps,
        "accuracy": record.accuracy,
        "rank": record.rank,
        "time": record.time,
        "ms_per_letter": record.ms_per_letter,
        "game_mode": record.game_mode,
        "created_at": _iso(record.created_at),
    }


__all__ = ["record_to_dict"]
