"""Common helpers for the horizons-fetcher CLI."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable

from fetch.service import HorizonsService

from ..config import AppConfig, load_config
from ..logging import LOG_FORMATS
from ..logging import configure_logging as _configure_package_logging

LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FAILURE = 2


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def non_negative_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a number, got '{value}'") from exc
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return number


def add_shared_arguments(parser: argparse.ArgumentParser, config: AppConfig) -> None:
    """Register the options every sub-command accepts."""

    parser.add_argument(
        "--log-level",
        default=config.log_level if config.log_level in LOG_LEVELS else "INFO",
        choices=sorted(LOG_LEVELS),
        help="Logging verbosity.",
    )
    parser.add_argument(
        "--log-format",
        default=config.log_format,
        choices=LOG_FORMATS,
        help="Render stderr logs as JSON objects or key=value text.",
    )
    parser.add_argument("--timeout", type=non_negative_float, default=config.timeout, help="HTTP timeout (seconds).")
    parser.add_argument("--retries", type=positive_int, default=config.retries, help="Attempts per query.")
    parser.add_argument("--backoff", type=non_negative_float, default=config.backoff, help="Pause between attempts (seconds).")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON to stdout.")


def configure_logging(level_name: str, log_format: str = "json") -> None:
    """Route package logs to stderr at the requested level and format."""

    level = LOG_LEVELS.get(level_name.upper(), logging.INFO)
    _configure_package_logging(level=level, force=True, fmt=log_format)


def parse_datetime(value: str) -> datetime:
    """Parse ISO 8601 (or ``YYYY-MM-DD``) into an aware UTC datetime."""

    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid datetime '{value}'") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def build_service(ns: argparse.Namespace) -> HorizonsService:
    config = load_config()
    config = dataclasses.replace(
        config,
        timeout=ns.timeout,
        retries=ns.retries,
        backoff=ns.backoff,
        center=getattr(ns, "center", None) or config.center,
    )
    return HorizonsService.from_config(config)


def emit_records(records: Iterable[Any], as_json: bool, render: Callable[[Any], str] = str) -> None:
    """Print records one per line, as JSON objects or via ``render``."""

    for record in records:
        if as_json:
            print(json.dumps(to_jsonable(record), ensure_ascii=False))
        else:
            print(render(record))


def to_jsonable(record: Any) -> Dict[str, Any]:
    if hasattr(record, "as_dict"):
        return record.as_dict()
    payload: Dict[str, Any] = {}
    for field in dataclasses.fields(record):
        value = getattr(record, field.name)
        if isinstance(value, datetime):
            payload[field.name] = value.isoformat()
        elif isinstance(value, tuple):
            payload[field.name] = [_quantity_value(item) for item in value]
        else:
            payload[field.name] = _quantity_value(value)
    return payload


def _quantity_value(value: Any) -> Any:
    # astropy quantities serialise as their SI magnitude.
    return float(value.value) if hasattr(value, "unit") else value
