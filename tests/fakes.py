"""In-memory stand-ins used by the test-suite."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, MutableMapping, Optional

from speedboard.core.time import utcnow
from speedboard.errors import DuplicateRecord, StaleRecord, StoreError, StoreFailure
from speedboard.models import BestRecord, Result


class FakeStore:
    """Durable store over a dict that records every call it receives."""

    def __init__(self, enforce_unique: bool = True):
        self.records: Dict[int, BestRecord] = {}
        self.calls: List[str] = []
        self.enforce_unique = enforce_unique
        self.read_error: Optional[StoreError] = None
        self.write_error: Optional[StoreError] = None
        self.before_write: Optional[Callable[[], None]] = None
        self._next_id = 1

    @property
    def writes(self) -> List[str]:
        return [call for call in self.calls if call in {"insert", "update_in_place"}]

    def _sorted(self, rows: List[BestRecord]) -> List[BestRecord]:
        return sorted(rows, key=lambda r: (-r.score, r.id))

    def rows_for(self, player_name: str, game_mode: int) -> List[BestRecord]:
        return self._sorted(
            [
                r
                for r in self.records.values()
                if r.player_name == player_name and r.game_mode == game_mode
            ]
        )

    def find_best(self, player_name: str, game_mode: int) -> Optional[BestRecord]:
        self.calls.append("find_best")
        if self.read_error is not None:
            raise self.read_error
        rows = self.rows_for(player_name, game_mode)
        return rows[0] if rows else None

    def list_all(self, game_mode: int, cap: int) -> List[BestRecord]:
        self.calls.append("list_all")
        if self.read_error is not None:
            raise self.read_error
        rows = [r for r in self.records.values() if r.game_mode == game_mode]
        return self._sorted(rows)[:cap]

    def _pre_write(self) -> None:
        if self.before_write is not None:
            hook, self.before_write = self.before_write, None
            hook()
        if self.write_error is not None:
            raise self.write_error

    def insert(self, result: Result) -> BestRecord:
        self.calls.append("insert")
        self._pre_write()
        if self.enforce_unique and self.rows_for(result.player_name, result.game_mode):
            raise DuplicateRecord(f"{result.player_name}/{result.game_mode} exists")
        return self.put(**result.as_dict())

    def update_in_place(self, record_id: int, fields: Mapping[str, Any]) -> BestRecord:
        self.calls.append("update_in_place")
        self._pre_write()
        current = self.records.get(record_id)
        if current is None:
            raise StoreFailure(f"record {record_id} does not exist")
        if "score" in fields and fields["score"] <= current.score:
            raise StaleRecord(f"record {record_id} already holds {current.score}")
        updated = BestRecord(**{**current.model_dump(), **fields})
        self.records[record_id] = updated
        return updated

    def put(self, **values: Any) -> BestRecord:
        """Seed a record directly, bypassing call tracking."""

        values.setdefault("created_at", utcnow())
        record = BestRecord(id=self._next_id, **values)
        self.records[record.id] = record
        self._next_id += 1
        return record


class BrokenBacking(MutableMapping[str, str]):
    """Key/value backing whose every operation fails."""

    def __getitem__(self, key: str) -> str:
        raise OSError("storage unavailable")

    def __setitem__(self, key: str, value: str) -> None:
        raise OSError("storage unavailable")

    def __delitem__(self, key: str) -> None:
        raise OSError("storage unavailable")

    def __iter__(self):
        raise OSError("storage unavailable")

    def __len__(self) -> int:
        raise OSError("storage unavailable")


def make_result(
    player_name: str = "ava",
    game_mode: int = 30,
    score: float = 50.0,
    lps: float = 5.0,
    accuracy: float = 95.0,
    rank: str = "Fast",
    time: float = 12.5,
    ms_per_letter: float = 200.0,
) -> Result:
    return Result(
        player_name=player_name,
        game_mode=game_mode,
        score=score,
        lps=lps,
        accuracy=accuracy,
        rank=rank,
        time=time,
        ms_per_letter=ms_per_letter,
    )


def record_values(**overrides: Any) -> Dict[str, Any]:
    values = make_result().as_dict()
    values.update(overrides)
    return values
