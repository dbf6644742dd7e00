"""Logging for horizons-fetcher.

Records go to one handler on the ``horizons_fetcher`` logger, rendered either
as JSON objects (the default, one per line) or as ``key=value`` text for
terminals. Metadata bound with :func:`log_context` and ``extra=`` values are
attached to every record, with credential-like keys masked.
"""

from __future__ import annotations

import contextlib
import contextvars
import datetime as _dt
import json
import logging
import os
import sys
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

_LOGGER_NAME = "horizons_fetcher"
_CONTEXT: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "horizons_fetcher_log_context", default={}
)
_SENSITIVE_KEYS = ("password", "secret", "token", "api_key", "apikey", "authorization", "cookie")
_REDACTED = "***REDACTED***"

LOG_FORMATS = ("json", "text")

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_FIELDS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"asctime", "message", "taskName"}


def _resolve_level(level: Optional[str | int]) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        level = os.getenv("HORIZONS_LOG_LEVEL", "INFO")
    try:
        return int(level)
    except (TypeError, ValueError):
        numeric = logging.getLevelName(str(level).upper())
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


def _resolve_format(fmt: Optional[str]) -> str:
    fmt = (fmt or os.getenv("HORIZONS_LOG_FORMAT") or "json").lower()
    if fmt not in LOG_FORMATS:
        raise ValueError(f"unknown log format {fmt!r}, expected one of {', '.join(LOG_FORMATS)}")
    return fmt


def _is_sensitive(key: Optional[str]) -> bool:
    if not key:
        return False
    lowered = key.lower()
    return any(token in lowered for token in _SENSITIVE_KEYS)


def _redact(value: Any, key_hint: Optional[str] = None) -> Any:
    if isinstance(value, Mapping):
        return {k: _redact(v, str(k)) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_redact(item, key_hint) for item in value]
    if _is_sensitive(key_hint):
        return _REDACTED
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _json_default(value: Any) -> Any:
    if isinstance(value, (_dt.datetime, _dt.date)):
        return value.isoformat()
    if hasattr(value, "as_dict"):
        return value.as_dict()
    return repr(value)


def _metadata(record: logging.LogRecord) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    context = _redact(_CONTEXT.get())
    extras = _redact({k: v for k, v in record.__dict__.items() if k not in _RECORD_FIELDS})
    return context, extras


class JSONFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message, context, extra."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": _dt.datetime.fromtimestamp(record.created, _dt.timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context, extras = _metadata(record)
        if context:
            payload["context"] = context
        if extras:
            payload["extra"] = extras
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_json_default)


class TextFormatter(logging.Formatter):
    """``2022-08-13T19:55:56+00:00 WARNING logger: message key=value ...``"""

    def format(self, record: logging.LogRecord) -> str:
        stamp = _dt.datetime.fromtimestamp(record.created, _dt.timezone.utc).isoformat(timespec="seconds")
        context, extras = _metadata(record)
        pairs = " ".join(f"{key}={value}" for key, value in _flatten({**context, **extras}))
        line = f"{stamp} {record.levelname} {record.name}: {record.getMessage()}"
        if pairs:
            line = f"{line} {pairs}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _flatten(values: Mapping[str, Any]) -> Iterable[Tuple[str, Any]]:
    for key, value in values.items():
        if isinstance(value, Mapping):
            for inner, item in _flatten(value):
                yield f"{key}.{inner}", item
        else:
            yield key, value


def configure_logging(
    level: Optional[str | int] = None,
    stream: Optional[Any] = None,
    force: bool = False,
    fmt: Optional[str] = None,
) -> logging.Logger:
    """Attach a handler to the package logger (once, unless ``force``).

    ``level`` and ``fmt`` default to ``HORIZONS_LOG_LEVEL`` and
    ``HORIZONS_LOG_FORMAT``; ``fmt`` is ``"json"`` or ``"text"``.
    """

    logger = logging.getLogger(_LOGGER_NAME)
    if force:
        logger.handlers.clear()
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(TextFormatter() if _resolve_format(fmt) == "text" else JSONFormatter())

    logger.addHandler(handler)
    logger.setLevel(_resolve_level(level))
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``horizons_fetcher`` or one of its children."""

    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name.startswith(_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


@contextlib.contextmanager
def log_context(**kwargs: Any):
    """Bind metadata, e.g. the queried body id, to records logged inside the block."""

    current = dict(_CONTEXT.get())
    current.update({k: v for k, v in kwargs.items() if v is not None})
    token = _CONTEXT.set(current)
    try:
        yield
    finally:
        _CONTEXT.reset(token)


__all__ = ["LOG_FORMATS", "JSONFormatter", "TextFormatter", "configure_logging", "get_logger", "log_context"]
