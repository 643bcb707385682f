"""Structured JSON logging for dirstore components.

Store loggers carry the cache directory on every record; per-call fields
such as ``key`` or ``path`` are passed as keyword arguments and end up in
the record's ``data`` object.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

_LOG_KWARGS = ("exc_info", "stack_info", "stacklevel", "extra")


class JsonFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record):
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "component": record.name.replace("dirstore.", ""),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        data = getattr(record, "store_data", None)
        if data:
            entry["data"] = data
        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)
        # keys may hold lone surrogates or other odd text
        return json.dumps(entry, default=str, ensure_ascii=True)


class StoreLogger(logging.LoggerAdapter):
    """Adds the bound store context plus call keywords to ``store_data``.

    Example::

        log = StoreLogger(get_store_logger("store"), {"dir": "/tmp/cache"})
        log.warning("Cache read failed", key="a")
        # {"component": "store", ..., "data": {"dir": "/tmp/cache", "key": "a"}}
    """

    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        fields = {k: kwargs.pop(k) for k in list(kwargs) if k not in _LOG_KWARGS}
        extra = dict(kwargs.get("extra") or {})
        extra["store_data"] = {**self.extra, **extra.get("store_data", {}), **fields}
        kwargs["extra"] = extra
        return msg, kwargs


def get_store_logger(
    component: str,
    log_file: str | None = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Return a named logger that emits structured JSON.

    Args:
        component: Short name for the component (e.g. "store").
        log_file: Optional path; writes JSON lines to this file instead of stderr.
        level: Logging level, defaults to INFO.

    Returns:
        A ``logging.Logger`` instance named ``dirstore.<component>``.
    """
    logger = logging.getLogger(f"dirstore.{component}")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.FileHandler(log_file) if log_file else logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)

    return logger


def bind_store_logger(logger: logging.Logger, **context: Any) -> StoreLogger:
    """Wrap ``logger`` so every record carries ``context`` in its data."""
    return StoreLogger(logger, context)
