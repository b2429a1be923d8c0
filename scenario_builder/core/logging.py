"""Logging setup for the service and the CLI."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_PACKAGE_LOGGER = "scenario_builder"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """
    Attach one stream handler to the package logger and set its level.

    Safe to call repeatedly (app startup, CLI, tests): an existing handler
    is reused and only the level is updated.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not any(getattr(h, "_scenario_builder", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._scenario_builder = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
