"""Key/value storage behind the local cache."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Dict, Iterator, MutableMapping, Optional


class MemoryBacking(MutableMapping[str, str]):
    """Process-local dictionary; forgotten on restart."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)


class JsonFileBacking(MutableMapping[str, str]):
    """Flat JSON object on disk, re-read on every access.

    Writes go to a sibling ``.tmp`` file that then replaces the original,
    so a crash mid-write leaves the previous contents intact.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return {str(key): str(value) for key, value in data.items()}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    def __getitem__(self, key: str) -> str:
        return self._load()[key]

    def __setitem__(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)

    def __delitem__(self, key: str) -> None:
        with self._lock:
            data = self._load()
            del data[key]
            self._save(data)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._load()))

    def __len__(self) -> int:
        return len(self._load())


__all__ = ["JsonFileBacking", "MemoryBacking"]
