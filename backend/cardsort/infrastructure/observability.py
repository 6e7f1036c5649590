"""Structured Logging — JSON and console formatters for game events.

Invariants:
    - Every JSON line carries timestamp, level, logger name, and message
    - Game context (game_id, pile_id, card_id, move_status, move_reason) is
      surfaced when the call site passes it via extra=
    - setup_logging is idempotent: calling it twice leaves one cardsort handler

Design Decisions:
    - stdlib logging with a custom Formatter, no logging dependency
    - ConsoleFormatter appends the same context as key=value pairs so tests
      and local runs read like the JSON stream
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS: tuple[str, ...] = (
    "game_id", "pile_id", "card_id", "error_code",
    "move_status", "move_reason", "path", "dataset_path",
)

_HANDLER_NAME = "cardsort"


def _context_of(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in CONTEXT_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context_of(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable line with the game context appended."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context_of(record)
        if context:
            line += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the cardsort handler on the root logger, replacing a previous one."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else ConsoleFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
