"""Decide whether a finished game becomes the player's new personal best.

A submission walks a small state machine::

    CHECK_CACHE -> READ_DURABLE -> INSERT | UPDATE_IN_PLACE | NO_OP -> DONE

``CHECK_CACHE`` may finish the call on its own, without touching the
store, when the cached best already covers the submitted score. Every
other path reads the authoritative best before deciding. A failed read
is logged and treated as "no record" so a first score is never dropped;
a failed write ends the call with ``accepted=False`` and leaves the cache
alone.

Two submissions for the same pair can still race between the read and
the write. The store rejects the loser with a ``WriteConflict``; the
reconciler then re-reads once and decides again on the fresh record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..cache import CacheEntry, LocalCache
from ..errors import StoreError, StoreFailure, WriteConflict
from ..models import BestRecord, Result
from ..store import DurableStore

logger = logging.getLogger(__name__)


class Step(str, Enum):
    CHECK_CACHE = "check_cache"
    READ_DURABLE = "read_durable"
    INSERT = "insert"
    UPDATE_IN_PLACE = "update_in_place"
    NO_OP = "no_op"
    DONE = "done"


@dataclass(frozen=True)
class SubmitOutcome:
    """What a submission achieved.

    ``accepted`` is false only when a write failed. ``is_new_best`` is true
    iff the call inserted or updated the stored record. ``steps`` lists the
    states visited, in order.
    """

    accepted: bool
    is_new_best: bool
    record_id: Optional[int] = None
    error: Optional[str] = None
    steps: Tuple[Step, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "success": self.accepted,
            "isNewBest": self.is_new_best,
            "id": self.record_id,
        }
        if self.error:
            payload["error"] = self.error
        return payload


@dataclass
class _Submission:
    result: Result
    current: Optional[BestRecord] = None
    conflict_seen: bool = False
    accepted: bool = True
    is_new_best: bool = False
    record_id: Optional[int] = None
    error: Optional[str] = None
    steps: List[Step] = field(default_factory=list)


class Reconciler:
    """Personal-best submission over an explicit store and cache."""

    def __init__(self, store: DurableStore, cache: LocalCache):
        self.store = store
        self.cache = cache
        self._handlers: Dict[Step, Callable[[_Submission], Step]] = {
            Step.CHECK_CACHE: self._check_cache,
            Step.READ_DURABLE: self._read_durable,
            Step.INSERT: self._insert,
            Step.UPDATE_IN_PLACE: self._update_in_place,
            Step.NO_OP: self._no_op,
        }

    def submit(self, result: Result) -> SubmitOutcome:
        sub = _Submission(result=result)
        step = Step.CHECK_CACHE
        while step is not Step.DONE:
            sub.steps.append(step)
            step = self._handlers[step](sub)

        logger.debug(
            "submission %s/%s score=%s path=%s",
            result.player_name,
            result.game_mode,
            result.score,
            "->".join(s.value for s in sub.steps),
        )
        return SubmitOutcome(
            accepted=sub.accepted,
            is_new_best=sub.is_new_best,
            record_id=sub.record_id,
            error=sub.error,
            steps=tuple(sub.steps),
        )

    # States -------------------------------------------------------------

    def _check_cache(self, sub: _Submission) -> Step:
        entry = self.cache.get(sub.result.player_name, sub.result.game_mode)
        if entry is not None and sub.result.score <= entry.best_score:
            sub.record_id = entry.record_id
            return Step.DONE
        return Step.READ_DURABLE

    def _read_durable(self, sub: _Submission) -> Step:
        result = sub.result
        try:
            sub.current = self.store.find_best(result.player_name, result.game_mode)
        except StoreError as exc:
            logger.warning(
                "could not read best for %s/%s, assuming none: %s",
                result.player_name,
                result.game_mode,
                exc,
            )
            sub.current = None
        return self._decide(sub)

    def _insert(self, sub: _Submission) -> Step:
        try:
            record = self.store.insert(sub.result)
        except WriteConflict as exc:
            return self._resolve_conflict(sub, exc)
        except StoreError as exc:
            return self._fail(sub, "insert", exc)
        self._remember(sub, record)
        sub.is_new_best = True
        return Step.DONE

    def _update_in_place(self, sub: _Submission) -> Step:
        current = sub.current
        if current is None or current.id is None:
            return self._fail(sub, "update", StoreFailure("no stored record to update"))
        try:
            record = self.store.update_in_place(current.id, sub.result.mutable_fields())
        except WriteConflict as exc:
            return self._resolve_conflict(sub, exc)
        except StoreError as exc:
            return self._fail(sub, "update", exc)
        self._remember(sub, record)
        sub.is_new_best = True
        return Step.DONE

    def _no_op(self, sub: _Submission) -> Step:
        if sub.current is None:
            return self._fail(sub, "no-op", StoreFailure("no stored record to keep"))
        # Repair the cache so the next non-improving submission stays local.
        self._remember(sub, sub.current)
        return Step.DONE

    # Helpers ------------------------------------------------------------

    def _decide(self, sub: _Submission) -> Step:
        if sub.current is None:
            return Step.INSERT
        if sub.result.score > sub.current.score:
            return Step.UPDATE_IN_PLACE
        return Step.NO_OP

    def _resolve_conflict(self, sub: _Submission, exc: WriteConflict) -> Step:
        result = sub.result
        if sub.conflict_seen:
            return self._fail(sub, "write", exc)
        sub.conflict_seen = True
        logger.info("write conflict for %s/%s: %s", result.player_name, result.game_mode, exc)

        try:
            sub.current = self.store.find_best(result.player_name, result.game_mode)
        except StoreError as read_exc:
            return self._fail(sub, "re-read", read_exc)
        if sub.current is None:
            return self._fail(sub, "re-read", exc)
        return self._decide(sub)

    def _remember(self, sub: _Submission, record: BestRecord) -> None:
        sub.record_id = record.id
        self.cache.set(
            sub.result.player_name,
            sub.result.game_mode,
            CacheEntry(best_score=record.score, record_id=record.id),
        )

    def _fail(self, sub: _Submission, operation: str, exc: Exception) -> Step:
        logger.error(
            "%s failed for %s/%s: %s",
            operation,
            sub.result.player_name,
            sub.result.game_mode,
            exc,
        )
        sub.accepted = False
        sub.is_new_best = False
        sub.error = str(exc)
        return Step.DONE


__all__ = ["Reconciler", "Step", "SubmitOutcome"]
