"""Logging helpers shared by the backend and the terminal clients."""

from __future__ import annotations

import logging
from typing import Optional

from rich.logging import RichHandler


def configure_logging(level: int | str = logging.INFO) -> None:
    """Route root logging through a Rich handler.

    Calling this again replaces the previous handler, so a CLI option can
    raise or lower verbosity after the defaults were installed.
    """
    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s | %(message)s", datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger."""
    return logging.getLogger(name or "backend")
