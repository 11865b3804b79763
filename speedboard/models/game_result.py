"""Game results: the per-game submission and the stored personal best."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow

# Columns rewritten when a better result replaces the stored best.
MUTABLE_FIELDS = ("score", "lps", "accuracy", "rank", "time", "ms_per_letter")


@dataclass(frozen=True)
class Result:
    """Metrics of one finished game.

    ``rank`` is the display tier shown to the player and ``time`` the
    elapsed game time in seconds; both keep the column names used by the
    ``game_results`` table.
    """

    player_name: str
    game_mode: int
    score: float
    lps: float
    accuracy: float
    rank: str
    time: float
    ms_per_letter: float

    def mutable_fields(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in MUTABLE_FIELDS}

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class BestRecord(SQLModel, table=True):
    """Best result seen for one (player_name, game_mode) pair."""

    __tablename__ = "game_results"
    __table_args__ = (
        UniqueConstraint("player_name", "game_mode", name="uq_game_results_player_mode"),
    )

    id: Optional[int] = ORMField(default=None, primary_key=True)
    player_name: str = ORMField(index=True)
    score: float
    lps: float
    accuracy: float
    rank: str
    time: float
    ms_per_letter: float
    game_mode: int = ORMField(index=True)
    created_at: datetime = ORMField(default_factory=utcnow)

    @classmethod
    def from_result(cls, result: Result) -> "BestRecord":
        return cls(**result.as_dict())


__all__ = ["BestRecord", "MUTABLE_FIELDS", "Result"]
