"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging

from .env import optional_env_var

# Per-request and per-migration INFO lines drown out the change listing.
_CHATTY_LOGGERS = ("httpx", "httpcore", "hishel", "alembic.runtime.migration")


def _level_from_environment(default: int) -> int:
    raw = optional_env_var("GYMSUPPLY_LOG_LEVEL")
    if raw is None:
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with a terse CLI format.

    ``level`` defaults to ``GYMSUPPLY_LOG_LEVEL`` or INFO. Pass ``force=True``
    to reconfigure during tests.
    """

    effective_level = level if level is not None else _level_from_environment(logging.INFO)
    logging.basicConfig(
        level=effective_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(effective_level, logging.WARNING))
