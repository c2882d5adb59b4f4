"""Logging utilities for the crossword generator."""

from __future__ import annotations

import logging
from typing import Optional, TextIO, Union

ROOT_LOGGER_NAME = "wordcross"


def resolve_level(level: Union[int, str]) -> int:
    """Accept numeric levels or names such as ``"debug"``; unknown names mean INFO."""

    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def configure_logging(level: Union[int, str] = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Install a single stream handler on the root logger.

    The generator runs hundreds of short attempts, so per-attempt details are
    logged at DEBUG while the outcome of a call is logged at INFO.
    """

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``wordcross`` namespace, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
