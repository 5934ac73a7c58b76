"""Logging for the Ingest Portal.

Every portal module logs under the ``ingest_portal`` namespace, obtained
through :func:`get_logger`.  The FastAPI lifespan calls
:func:`setup_logging` once with the configured ``LOG_LEVEL``.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER = "ingest_portal"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Third-party loggers that would otherwise log every request.
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: int | str = logging.INFO) -> None:
    """Send log records to stdout at *level*.

    *level* may be a ``logging`` constant or a level name in any case; an
    unknown name falls back to ``INFO``.
    """
    logging.basicConfig(
        level=_resolve_level(level),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str = "") -> logging.Logger:
    """Return the portal logger, or the child logger ``ingest_portal.<name>``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)
