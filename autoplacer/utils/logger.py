"""Logging utilities tailored for frenzy placement runs."""

from __future__ import annotations

import logging
from typing import Optional


LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

# Per-attempt chatter: every draw, rollback and CP-SAT verdict.
SEARCH_LOGGERS = (
    "autoplacer.engine.random_placer",
    "autoplacer.engine.feasibility",
)


def configure_logging(level: int = logging.INFO, search_detail: bool = False) -> None:
    """Configure root logging for a placement run.

    A run performs many rolled-back placement attempts. At DEBUG the search
    loggers in :data:`SEARCH_LOGGERS` would drown the per-row decisions, so
    they stay at INFO unless ``search_detail`` is set.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    quiet = level <= logging.DEBUG and not search_detail
    for name in SEARCH_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if quiet else logging.NOTSET)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "autoplacer")
