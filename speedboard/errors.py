"""Exception hierarchy for submission and ranking failures."""

from __future__ import annotations


class SpeedboardError(Exception):
    """Base class for every error raised by this package."""


class ValidationFailure(SpeedboardError):
    """A submitted result is malformed; nothing was read or written."""


class StoreError(SpeedboardError):
    """The durable store could not complete a request."""


class StoreTimeout(StoreError):
    """The durable store did not answer within the configured bound."""

    def __init__(self, operation: str, timeout: float):
        super().__init__(f"{operation} timed out after {timeout:g}s")
        self.operation = operation
        self.timeout = timeout


class StoreFailure(StoreError):
    """Any other I/O or validation failure reported by the durable store."""


class WriteConflict(StoreFailure):
    """A write was refused because the stored best changed since it was read."""


class DuplicateRecord(WriteConflict):
    """An insert collided with an existing record for the same player and mode."""


class StaleRecord(WriteConflict):
    """An update would not improve on the score currently stored."""


__all__ = [
    "DuplicateRecord",
    "SpeedboardError",
    "StaleRecord",
    "StoreError",
    "StoreFailure",
    "StoreTimeout",
    "ValidationFailure",
    "WriteConflict",
]
