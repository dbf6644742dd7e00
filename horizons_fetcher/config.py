"""Application configuration loader for horizons_fetcher."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from .logging import LOG_FORMATS

__all__ = [
    "AppConfig",
    "DEFAULT_API_URL",
    "DEFAULT_BACKOFF",
    "DEFAULT_CENTER",
    "DEFAULT_RETRIES",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "load_config",
]

DEFAULT_API_URL = "https://ssd.jpl.nasa.gov/api/horizons.api"
DEFAULT_USER_AGENT = "horizons-fetcher/0.5 (+https://example.local) Python-urllib"
DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRIES = 3  # attempts, including the first one
DEFAULT_BACKOFF = 1.0  # seconds, fixed between attempts
# Sun body center. The Solar System Barycenter (500@0) sits slightly apart.
DEFAULT_CENTER = "500@10"


@dataclass(frozen=True)
class AppConfig:
    """Settings shared by the fetch layer and the CLI."""

    api_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES
    backoff: float = DEFAULT_BACKOFF
    center: str = DEFAULT_CENTER
    log_level: str = "INFO"
    log_format: str = "json"


def _to_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{key} must not be negative, got {raw!r}")
    return value


def _to_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ValueError(f"{key} must be at least 1, got {raw!r}")
    return value


def _to_choice(env: Mapping[str, str], key: str, choices: Sequence[str], default: str) -> str:
    raw = (env.get(key) or "").strip().lower()
    if not raw:
        return default
    if raw not in choices:
        raise ValueError(f"{key} must be one of {', '.join(choices)}, got {raw!r}")
    return raw


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Load configuration from environment variables."""

    env_map: Mapping[str, str] = os.environ if env is None else env

    return AppConfig(
        api_url=env_map.get("HORIZONS_API_URL") or DEFAULT_API_URL,
        user_agent=env_map.get("HORIZONS_USER_AGENT") or DEFAULT_USER_AGENT,
        timeout=_to_float(env_map, "HORIZONS_TIMEOUT", DEFAULT_TIMEOUT),
        retries=_to_int(env_map, "HORIZONS_RETRIES", DEFAULT_RETRIES),
        backoff=_to_float(env_map, "HORIZONS_BACKOFF", DEFAULT_BACKOFF),
        center=env_map.get("HORIZONS_CENTER") or DEFAULT_CENTER,
        log_level=(env_map.get("HORIZONS_LOG_LEVEL") or "INFO").upper(),
        log_format=_to_choice(env_map, "HORIZONS_LOG_FORMAT", LOG_FORMATS, "json"),
    )
