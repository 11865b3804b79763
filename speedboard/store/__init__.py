"""Durable store adapters."""

from .base import DurableStore
from .sql import SQLStore

__all__ = ["DurableStore", "SQLStore"]
