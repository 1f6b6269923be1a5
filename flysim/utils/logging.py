"""Logging setup shared by the server and the headless CLI."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s"

# Loggers that would drown the simulation output at 60 Hz polling rates
_NOISY_LOGGERS = ("uvicorn.access", "websockets.protocol")


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Install a single stdout handler on the root logger at *level*."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
