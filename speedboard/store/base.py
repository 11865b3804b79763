"""Contract between the reconciler/ranker and the durable store."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol

from ..models import BestRecord, Result


class DurableStore(Protocol):
    """Single source of truth holding one best record per player and mode.

    Reads carry no caller identity: leaderboard and best-score lookups
    answer the same way whoever asks. Implementations raise
    ``StoreTimeout`` when a read exceeds its bound and ``StoreFailure``
    (or a ``WriteConflict`` subclass) for everything else. "No record" is
    reported as ``None``, never as an error.
    """

    def find_best(self, player_name: str, game_mode: int) -> Optional[BestRecord]:
        ...

    def insert(self, result: Result) -> BestRecord:
        ...

    def update_in_place(self, record_id: int, fields: Mapping[str, Any]) -> BestRecord:
        ...

    def list_all(self, game_mode: int, cap: int) -> List[BestRecord]:
        ...


__all__ = ["DurableStore"]
