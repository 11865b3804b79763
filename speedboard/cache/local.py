"""Best-effort local mirror of each player's stored best.

Nothing read from here is trusted for a write decision: a cached score can
only short-circuit a submission that would not improve on it. Every
failure of the underlying storage is swallowed and logged, so callers see
a missing entry on read and a silent no-op on write.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, MutableMapping, Optional, Sequence

from ..core.config import GAME_MODES
from .backings import MemoryBacking

logger = logging.getLogger(__name__)

DISPLAY_NAME_KEY = "player_name"
_KEY_RE = re.compile(r"^(?:best_score|record_id)_(?P<player>.+)_(?P<mode>\d+)$")


def _score_key(player_name: str, game_mode: int) -> str:
    return f"best_score_{player_name}_{game_mode}"


def _id_key(player_name: str, game_mode: int) -> str:
    return f"record_id_{player_name}_{game_mode}"


@dataclass(frozen=True)
class CacheEntry:
    best_score: float
    record_id: Optional[int] = None


class LocalCache:
    """Per-player, per-mode cache over a string key/value backing."""

    def __init__(
        self,
        backing: Optional[MutableMapping[str, str]] = None,
        game_modes: Sequence[int] = GAME_MODES,
    ):
        self._backing: MutableMapping[str, str] = (
            backing if backing is not None else MemoryBacking()
        )
        self.game_modes = tuple(game_modes)

    def get(self, player_name: str, game_mode: int) -> Optional[CacheEntry]:
        try:
            raw_score = self._backing.get(_score_key(player_name, game_mode))
            if raw_score is None:
                return None
            best_score = float(raw_score)
            if not math.isfinite(best_score):
                return None
            raw_id = self._backing.get(_id_key(player_name, game_mode))
        except Exception:
            logger.debug("cache read failed for %s/%s", player_name, game_mode, exc_info=True)
            return None
        return CacheEntry(best_score=best_score, record_id=_parse_id(raw_id))

    def set(self, player_name: str, game_mode: int, entry: CacheEntry) -> None:
        try:
            self._backing[_score_key(player_name, game_mode)] = repr(float(entry.best_score))
            if entry.record_id is not None:
                self._backing[_id_key(player_name, game_mode)] = str(int(entry.record_id))
        except Exception:
            logger.debug("cache write failed for %s/%s", player_name, game_mode, exc_info=True)

    def clear(self, player_name: str) -> None:
        """Forget every mode cached for ``player_name``."""

        try:
            doomed = []
            for key in list(self._backing):
                match = _KEY_RE.match(key)
                if match and match.group("player") == player_name:
                    doomed.append(key)
            for key in doomed:
                self._backing.pop(key, None)
        except Exception:
            logger.debug("cache clear failed for %s", player_name, exc_info=True)

    def get_display_name(self) -> Optional[str]:
        try:
            name = self._backing.get(DISPLAY_NAME_KEY)
        except Exception:
            logger.debug("cache read failed for display name", exc_info=True)
            return None
        return name or None

    def set_display_name(self, name: str) -> None:
        try:
            self._backing[DISPLAY_NAME_KEY] = name
        except Exception:
            logger.debug("cache write failed for display name", exc_info=True)

    def profile(self, player_name: str) -> Dict[str, Any]:
        """Best cached score across the configured modes."""

        best_score: Optional[float] = None
        best_mode: Optional[int] = None
        for mode in self.game_modes:
            entry = self.get(player_name, mode)
            if entry is not None and (best_score is None or entry.best_score > best_score):
                best_score = entry.best_score
                best_mode = mode

        return {
            "name": player_name,
            "bestScore": best_score,
            "bestGameMode": best_mode,
            "hasProfile": best_score is not None,
        }


def _parse_id(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


__all__ = ["CacheEntry", "DISPLAY_NAME_KEY", "LocalCache"]
