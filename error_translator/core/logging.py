"""Logging configuration for services using the error translator."""

from __future__ import annotations

import logging
import sys
import traceback
from typing import Any

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO", *, force: bool = False) -> None:
    """Configure process-wide logging with a consistent line format.

    Existing root handlers are kept unless ``force`` is set.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=force,
    )


def safe_log(logger: logging.Logger, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
    """Log through ``logger`` without letting a broken filter or handler escape."""
    kwargs.setdefault("stacklevel", 2)
    try:
        logger.log(level, msg, *args, **kwargs)
    except Exception:
        if logging.raiseExceptions:
            traceback.print_exc(file=sys.stderr)
