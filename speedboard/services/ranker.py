"""Leaderboard ordering over stored personal bests."""

from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import List, Tuple

from ..core.config import LEADERBOARD_DEFAULT_LIMIT, LEADERBOARD_FETCH_CAP
from ..models import BestRecord
from ..store import DurableStore

logger = logging.getLogger(__name__)

WEIGHTED_EPSILON = 1e-4
ACCURACY_EPSILON = 1e-2


def weighted_score(record: BestRecord) -> float:
    """Letters per second scaled by the square of the accuracy fraction."""

    return record.lps * (record.accuracy / 100.0) ** 2


def _desc(a: float, b: float) -> int:
    if a > b:
        return -1
    if a < b:
        return 1
    return 0


def _compare(left: Tuple[float, BestRecord], right: Tuple[float, BestRecord]) -> int:
    left_weight, a = left
    right_weight, b = right

    if abs(left_weight - right_weight) > WEIGHTED_EPSILON:
        return _desc(left_weight, right_weight)
    if abs(a.accuracy - b.accuracy) > ACCURACY_EPSILON:
        return _desc(a.accuracy, b.accuracy)
    if a.lps != b.lps:
        return _desc(a.lps, b.lps)
    # Older record first when every metric ties.
    return -_desc(a.id or 0, b.id or 0)


class Ranker:
    """Recomputes the leaderboard from a fresh read on every call."""

    def __init__(self, store: DurableStore, fetch_cap: int = LEADERBOARD_FETCH_CAP):
        self.store = store
        self.fetch_cap = fetch_cap

    def rank(self, game_mode: int, limit: int = LEADERBOARD_DEFAULT_LIMIT) -> List[BestRecord]:
        if limit < 0:
            raise ValueError("limit must not be negative")

        records = self.store.list_all(game_mode, self.fetch_cap)
        if len(records) >= self.fetch_cap:
            logger.info("leaderboard for mode %s reached the fetch cap of %s", game_mode, self.fetch_cap)

        keyed = [(weighted_score(record), record) for record in records]
        keyed.sort(key=cmp_to_key(_compare))
        return [record for _, record in keyed[:limit]]


__all__ = ["ACCURACY_EPSILON", "Ranker", "WEIGHTED_EPSILON", "weighted_score"]
