"""Logging setup shared by the CLI and the HTTP server."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from paramset.core.config import log_level

_FORMAT = "%(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Route the `paramset` loggers through a rich handler on stderr.

    Safe to call more than once; the handler is only installed the first time.
    """
    root = logging.getLogger("paramset")
    root.setLevel((level or log_level()).upper())
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    root.propagate = False
