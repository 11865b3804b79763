"""Model exports."""

from .game_result import MUTABLE_FIELDS, BestRecord, Result

__all__ = [
    "BestRecord",
    "MUTABLE_FIELDS",
    "Result",
]
