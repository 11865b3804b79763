"""Logging setup."""

from __future__ import annotations

import logging

from .config import LOG_LEVEL

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install the root handler once; later calls only adjust the level."""

    logging.basicConfig(format=_FORMAT, datefmt="%H:%M:%S")
    logging.getLogger("speedboard").setLevel(level or LOG_LEVEL)


__all__ = ["configure_logging"]
