"""Package logger helpers."""

from __future__ import annotations

import logging
import os

_ROOT_NAME = "presetNav"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger(_ROOT_NAME)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it for *name*."""

    if not name:
        return logger
    if name == _ROOT_NAME or name.startswith(_ROOT_NAME + "."):
        return logging.getLogger(name)
    return logger.getChild(name)


def configure_logging(level: int | str | None = None) -> None:
    """Attach a stream handler to the package logger once.

    The level defaults to ``PRESETNAV_LOG_LEVEL`` from the environment, then
    ``WARNING``.  Hosts that configure logging themselves never need this.
    """

    resolved = level or os.environ.get("PRESETNAV_LOG_LEVEL", "WARNING")
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING
    logger.setLevel(resolved)
    if not any(getattr(h, "_presetnav", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._presetnav = True  # type: ignore[attr-defined]
        logger.addHandler(handler)


__all__ = ["configure_logging", "get_logger", "logger"]
