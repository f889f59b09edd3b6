"""Render log records as GitHub Actions workflow commands."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Map Python log levels to workflow command names.
_LEVEL_MAP: dict[int, str] = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def _escape(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsLogHandler(logging.StreamHandler):
    """A :class:`logging.StreamHandler` that writes ``::warning::`` etc.

    INFO records are written as plain lines; DEBUG, WARNING and ERROR records
    become ``::debug::``, ``::warning::`` and ``::error::`` commands so the
    runner shows them as annotations.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__(stream or sys.stdout)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _LEVEL_MAP.get(record.levelno)
        if command is None:
            if record.levelno > logging.ERROR:
                command = "error"
            elif record.levelno > logging.WARNING:
                command = "warning"
            else:
                return message
        return f"::{command}::{_escape(message)}"


def configure_logging(*, verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Attach an :class:`ActionsLogHandler` to the ``boardflow`` logger."""
    root = logging.getLogger("boardflow")
    for handler in list(root.handlers):
        if isinstance(handler, ActionsLogHandler):
            root.removeHandler(handler)
    handler = ActionsLogHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.propagate = False
    return root
