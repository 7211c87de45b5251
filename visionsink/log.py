"""Logging setup for command-line runs.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
CLI calls ``configure_logging`` once to attach a Rich handler.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "INFO", console: Console | None = None) -> None:
    """Route the ``visionsink`` logger tree through a ``RichHandler``."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger("visionsink")
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
