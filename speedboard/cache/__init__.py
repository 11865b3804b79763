"""Local cache of known personal bests."""

from .backings import JsonFileBacking, MemoryBacking
from .local import DISPLAY_NAME_KEY, CacheEntry, LocalCache

__all__ = [
    "CacheEntry",
    "DISPLAY_NAME_KEY",
    "JsonFileBacking",
    "LocalCache",
    "MemoryBacking",
]
