"""Logging configuration for the engine, the API server and the headless CLI."""

from __future__ import annotations

import logging
import sys

# Per-request access lines drown out engine output at INFO.
_QUIET_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO", quiet: tuple[str, ...] = _QUIET_LOGGERS) -> None:
    """Route every ``mazerun.*`` logger to stdout with one compact format.

    Loggers named in *quiet* are raised to WARNING unless DEBUG is requested.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-7s %(name)-28s %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name in quiet:
            logging.getLogger(name).setLevel(logging.WARNING)
