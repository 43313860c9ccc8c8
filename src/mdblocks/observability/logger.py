"""Structured JSON logging for mdblocks.

Each record becomes one JSON line::

    {"ts": "2025-07-01T12:00:00.123456+00:00", "level": "DEBUG",
     "logger": "mdblocks.document", "message": "document updated",
     "kept": 12, "inserted": 1, "removed": 1, "blocks": 13}

Structured fields travel in ``extra={"extra_fields": {...}}``.  Command
dumps can carry whole rendered blocks, so long string values are cut to
``max_field_length`` characters.

Usage::

    from mdblocks.observability import get_logger

    log = get_logger("mdblocks.document")
    log.debug("document updated", extra={"extra_fields": {"kept": 3}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

DEFAULT_MAX_FIELD_LENGTH = 2000


def _truncate(value: Any, limit: int) -> Any:
    if isinstance(value, str):
        if len(value) > limit:
            return f"{value[:limit]}...[{len(value) - limit} more]"
        return value
    if isinstance(value, dict):
        return {k: _truncate(v, limit) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_truncate(v, limit) for v in value]
    return value


class StructuredFormatter(logging.Formatter):
    """Render log records as single-line JSON objects.

    Guaranteed keys are ``ts`` (UTC ISO-8601), ``level``, ``logger`` and
    ``message``; ``exception`` and ``stack_info`` appear when present.

    Parameters
    ----------
    max_field_length:
        Longest string kept verbatim inside ``extra_fields``.
    """

    def __init__(self, max_field_length: int = DEFAULT_MAX_FIELD_LENGTH) -> None:
        super().__init__()
        self.max_field_length = max_field_length

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields = getattr(record, "extra_fields", None)
        if fields:
            entry.update(_truncate(fields, self.max_field_length))
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)
        return json.dumps(entry, default=str)


_configured: set[str] = set()


def get_logger(
    name: str = "mdblocks",
    *,
    level: int | str = logging.INFO,
    stream: Any | None = None,
) -> logging.Logger:
    """Return the JSON logger called *name*, configuring it on first use.

    The first call for a name attaches a :class:`StructuredFormatter`
    handler writing to *stream* (``sys.stderr`` by default), sets *level*
    (an ``int`` or a case-insensitive level name) and stops propagation.
    Later calls return the same logger untouched.

    ``update()`` summaries are logged at ``DEBUG`` and stay silent at the
    default ``INFO`` level.
    """
    logger = logging.getLogger(name)
    if name in _configured:
        return logger

    logger.setLevel(level.upper() if isinstance(level, str) else level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    # Parent handlers would print every record a second time.
    logger.propagate = False
    _configured.add(name)
    return logger
