"""SQLModel-backed durable store."""

from __future__ import annotations

import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Any, Callable, List, Mapping, Optional, TypeVar

from sqlalchemy import update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from ..core.config import STORE_READ_TIMEOUT_SEC
from ..errors import DuplicateRecord, StaleRecord, StoreFailure, StoreTimeout
from ..models import MUTABLE_FIELDS, BestRecord, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SQLStore:
    """``game_results`` table accessed through two engines.

    ``engine`` serves every read and needs no privileges beyond SELECT.
    ``write_engine`` carries the credentials allowed to insert and update;
    it defaults to ``engine`` for single-database deployments.
    """

    def __init__(
        self,
        engine: Engine,
        write_engine: Optional[Engine] = None,
        *,
        read_timeout: float = STORE_READ_TIMEOUT_SEC,
        executor: Optional[Executor] = None,
    ):
        self._engine = engine
        self._write_engine = write_engine or engine
        self.read_timeout = read_timeout
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=4, thread_name_prefix="speedboard-read"
        )

    def create_schema(self, reset: bool = False) -> None:
        if reset:
            SQLModel.metadata.drop_all(self._write_engine)
        SQLModel.metadata.create_all(self._write_engine)

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    # Reads --------------------------------------------------------------

    def _bounded(self, operation: str, fn: Callable[..., T], *args: Any) -> T:
        future = self._executor.submit(fn, *args)
        try:
            return future.result(timeout=self.read_timeout)
        except FutureTimeout as exc:
            # Only drops a queued call; a running query ends at the driver timeout.
            future.cancel()
            logger.warning("%s exceeded %.1fs", operation, self.read_timeout)
            raise StoreTimeout(operation, self.read_timeout) from exc
        except SQLAlchemyError as exc:
            raise StoreFailure(f"{operation} failed: {exc}") from exc

    def find_best(self, player_name: str, game_mode: int) -> Optional[BestRecord]:
        return self._bounded("find_best", self._select_best, player_name, game_mode)

    def list_all(self, game_mode: int, cap: int) -> List[BestRecord]:
        return self._bounded("list_all", self._select_mode, game_mode, cap)

    def _select_best(self, player_name: str, game_mode: int) -> Optional[BestRecord]:
        # Highest score first so rows left over from before the unique
        # constraint still resolve to the real best.
        with Session(self._engine) as session:
            return session.exec(
                select(BestRecord)
                .where(
                    BestRecord.player_name == player_name,
                    BestRecord.game_mode == game_mode,
                )
                .order_by(BestRecord.score.desc(), BestRecord.id.asc())
                .limit(1)
            ).first()

    def _select_mode(self, game_mode: int, cap: int) -> List[BestRecord]:
        with Session(self._engine) as session:
            return list(
                session.exec(
                    select(BestRecord)
                    .where(BestRecord.game_mode == game_mode)
                    .order_by(BestRecord.score.desc(), BestRecord.id.asc())
                    .limit(cap)
                ).all()
            )

    # Writes -------------------------------------------------------------

    def insert(self, result: Result) -> BestRecord:
        record = BestRecord.from_result(result)
        with Session(self._write_engine, expire_on_commit=False) as session:
            session.add(record)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateRecord(
                    f"best record already exists for {result.player_name!r} "
                    f"in mode {result.game_mode}"
                ) from exc
            except SQLAlchemyError as exc:
                session.rollback()
                raise StoreFailure(f"insert failed: {exc}") from exc
            session.refresh(record)
        return record

    def update_in_place(self, record_id: int, fields: Mapping[str, Any]) -> BestRecord:
        unknown = set(fields) - set(MUTABLE_FIELDS)
        if unknown:
            raise StoreFailure(f"cannot update immutable fields: {sorted(unknown)}")

        # One conditional statement: a concurrent writer that already stored
        # a score at least as high makes this match zero rows.
        statement = update(BestRecord).where(BestRecord.id == record_id)
        if "score" in fields:
            statement = statement.where(BestRecord.score < fields["score"])
        statement = statement.values(**fields)

        with Session(self._write_engine, expire_on_commit=False) as session:
            try:
                matched = session.exec(statement).rowcount
                if matched == 0:
                    current = session.get(BestRecord, record_id)
                    held = current.score if current is not None else None
                    session.rollback()
                    if held is None:
                        raise StoreFailure(f"record {record_id} does not exist")
                    raise StaleRecord(f"record {record_id} already holds {held}")
                session.commit()
                record = session.get(BestRecord, record_id, populate_existing=True)
            except SQLAlchemyError as exc:
                session.rollback()
                raise StoreFailure(f"update failed: {exc}") from exc
        if record is None:
            raise StoreFailure(f"record {record_id} disappeared after update")
        return record


__all__ = ["SQLStore"]
