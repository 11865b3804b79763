"""Turn an inbound payload into a ``Result`` or reject it."""

from __future__ import annotations

import math
from typing import Any, Mapping, Sequence

from ..core.config import GAME_MODES, PLAYER_NAME_MAX_LEN
from ..errors import ValidationFailure
from ..models import Result


def _number(body: Mapping[str, Any], name: str) -> float:
    value = body.get(name)
    if value is None:
        raise ValidationFailure(f"Missing required field: {name}")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationFailure(f"{name} must be a number")
    value = float(value)
    if not math.isfinite(value):
        raise ValidationFailure(f"{name} must be finite")
    return value


def _game_mode(body: Mapping[str, Any], game_modes: Sequence[int]) -> int:
    mode = _number(body, "game_mode")
    if not mode.is_integer() or int(mode) not in game_modes:
        allowed = ", ".join(str(m) for m in game_modes)
        raise ValidationFailure(f"game_mode must be one of: {allowed}")
    return int(mode)


def normalize_player_name(raw: Any) -> str:
    """Trim and bound a player name the way it is stored."""

    name = raw.strip() if isinstance(raw, str) else ""
    if not name:
        raise ValidationFailure("Missing required field: player_name")
    return name[:PLAYER_NAME_MAX_LEN]


def validate_result(
    body: Mapping[str, Any], game_modes: Sequence[int] = GAME_MODES
) -> Result:
    """Build a ``Result`` from a submission body.

    Raises ``ValidationFailure`` for a missing player name, score or game
    mode, an unknown mode, or metrics outside their ranges.
    """

    player_name = normalize_player_name(body.get("player_name"))
    score = _number(body, "score")
    game_mode = _game_mode(body, game_modes)

    lps = _number(body, "lps")
    accuracy = _number(body, "accuracy")
    elapsed = _number(body, "time")
    ms_per_letter = _number(body, "ms_per_letter")

    if score < 0:
        raise ValidationFailure("score must not be negative")
    if lps < 0:
        raise ValidationFailure("lps must not be negative")
    if not 0 <= accuracy <= 100:
        raise ValidationFailure("accuracy must be between 0 and 100")
    if elapsed <= 0:
        raise ValidationFailure("time must be positive")
    if ms_per_letter <= 0:
        raise ValidationFailure("ms_per_letter must be positive")

    rank = body.get("rank")
    if rank is not None and not isinstance(rank, str):
        raise ValidationFailure("rank must be a string")

    return Result(
        player_name=player_name,
        game_mode=game_mode,
        score=score,
        lps=lps,
        accuracy=accuracy,
        rank=rank or "",
        time=elapsed,
        ms_per_letter=ms_per_letter,
    )


__all__ = ["normalize_player_name", "validate_result"]
