"""Structured JSON logging for notionpress.

Each record becomes one JSON object per line, so importer runs over large
workspaces can be fed straight into a log pipeline::

    {"ts": "2026-10-19T08:00:00.000000+00:00", "level": "INFO",
     "logger": "notionpress.importer", "message": "page imported",
     "page_id": "abc123", "target_id": 42, "duration_ms": 311.2}

Structured fields ride on ``extra={"extra_fields": {...}}``; the
:func:`log_event` helper builds that wrapper for you.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from datetime import datetime, timezone
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Render log records as single-line JSON.

    Guaranteed keys: ``ts`` (UTC ISO-8601), ``level``, ``logger`` and
    ``message``.  Fields from ``record.extra_fields`` are merged at the top
    level; ``exception`` and ``stack_info`` appear when the record has them.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        fields: dict[str, Any] | None = getattr(record, "extra_fields", None)
        if fields:
            entry.update(fields)

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


# One handler per logger name, so repeated get_logger calls stay idempotent.
_configured: set[str] = set()
_configured_lock = threading.Lock()


def get_logger(
    name: str = "notionpress",
    *,
    level: int | str = logging.INFO,
    stream: Any | None = None,
) -> logging.Logger:
    """Return a logger that writes :class:`StructuredFormatter` output.

    Parameters
    ----------
    name:
        Logger name, e.g. ``"notionpress.importer"``.
    level:
        Minimum level, as an ``int`` or a case-insensitive level name.
        Only applied the first time *name* is configured.
    stream:
        Handler stream.  Defaults to ``sys.stderr``.
    """
    logger = logging.getLogger(name)

    with _configured_lock:
        if name in _configured:
            return logger

        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
        logger.setLevel(level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

        _configured.add(name)

    return logger


def log_event(
    logger: logging.Logger,
    level: int,
    message: str,
    **fields: Any,
) -> None:
    """Log *message* at *level* with *fields* as structured JSON keys."""
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={"extra_fields": fields})
