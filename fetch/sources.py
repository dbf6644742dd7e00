"""HTTP access to the Horizons API and its JSON envelope."""
from __future__ import annotations

import dataclasses
import datetime as dt
import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Callable, Dict, List, Optional

from horizons_fetcher.config import DEFAULT_API_URL, DEFAULT_CENTER, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from horizons_fetcher.core.timestamp import MONTH_ABBREVIATIONS
from horizons_fetcher.logging import get_logger

LOGGER = get_logger("fetch.sources")

Params = Dict[str, str]


class HorizonsError(RuntimeError):
    """Raised when Horizons cannot be reached or answers with an error."""


class HorizonsRequestError(HorizonsError):
    """Horizons rejected the query itself; sending it again cannot succeed.

    Covers HTTP 4xx answers and any response whose JSON envelope is unusable,
    including the service's own ``error`` reports.
    """


def _quote(value: object) -> str:
    return f"'{value}'"


def format_horizons_time(value: dt.datetime) -> str:
    """Render ``value`` the way ``START_TIME``/``STOP_TIME`` expect it."""

    if value.tzinfo is not None:
        value = value.astimezone(dt.timezone.utc)
    month = MONTH_ABBREVIATIONS[value.month - 1]
    return f"{value:%Y}-{month}-{value:%d-%H:%M:%S}"


def major_bodies_query() -> Params:
    return {"format": "json", "COMMAND": _quote("MB")}


def _ephemeris_query(
    ephem_type: str,
    body_id: int,
    start: dt.datetime,
    stop: dt.datetime,
    center: str,
) -> Params:
    return {
        "format": "json",
        "COMMAND": _quote(body_id),
        "OBJ_DATA": "NO",
        "MAKE_EPHEM": "YES",
        "EPHEM_TYPE": ephem_type,
        "CENTER": _quote(center),
        "START_TIME": _quote(format_horizons_time(start)),
        "STOP_TIME": _quote(format_horizons_time(stop)),
    }


def vector_query(body_id: int, start: dt.datetime, stop: dt.datetime, center: str = DEFAULT_CENTER) -> Params:
    return _ephemeris_query("VECTORS", body_id, start, stop, center)


def elements_query(body_id: int, start: dt.datetime, stop: dt.datetime, center: str = DEFAULT_CENTER) -> Params:
    return _ephemeris_query("ELEMENTS", body_id, start, stop, center)


def properties_query(body_id: int) -> Params:
    return {
        "format": "json",
        "COMMAND": _quote(body_id),
        "OBJ_DATA": "YES",
        "MAKE_EPHEM": "NO",
    }


def unwrap_envelope(payload: str) -> str:
    """Return the human-readable ``result`` text of a JSON response.

    Horizons wraps the telnet-style output in ``{"signature": ..., "result": ...}``
    and reports request errors under an ``error`` key.
    """

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise HorizonsRequestError("Horizons returned a non-JSON payload") from exc
    if not isinstance(data, dict):
        raise HorizonsRequestError("Horizons returned an unexpected JSON document")
    if data.get("error"):
        raise HorizonsRequestError(f"Horizons error: {data['error']}")
    result = data.get("result")
    if not isinstance(result, str):
        raise HorizonsRequestError("Horizons response has no 'result' text")
    return result


@dataclasses.dataclass
class HorizonsSource:
    """Wraps the Horizons endpoint: one GET per query, no retries."""

    url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    extra_headers: Optional[Dict[str, str]] = None
    opener: Optional[Callable[[urllib.request.Request, float], bytes]] = None

    def _build_request(self, params: Params) -> urllib.request.Request:
        url = f"{self.url}?{urllib.parse.urlencode(params)}"
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        if self.extra_headers:
            headers.update(self.extra_headers)
        return urllib.request.Request(url, headers=headers, method="GET")

    def _default_opener(self, request: urllib.request.Request, timeout: float) -> bytes:
        with urllib.request.urlopen(request, timeout=timeout) as resp:
            status = getattr(resp, "status", None) or resp.getcode()
            if status != 200:
                raise HorizonsError(f"Horizons returned HTTP {status}")
            return resp.read()

    def fetch(self, params: Params) -> str:
        """Return the raw response body for ``params`` as text."""

        request = self._build_request(params)
        opener = self.opener or self._default_opener
        LOGGER.debug("GET %s", request.full_url)
        try:
            payload = opener(request, self.timeout)
        except HorizonsError:
            raise
        except urllib.error.HTTPError as exc:
            if 400 <= exc.code < 500:
                raise HorizonsRequestError(f"Horizons rejected the request: HTTP {exc.code}") from exc
            raise HorizonsError(f"Horizons returned HTTP {exc.code}") from exc
        except (urllib.error.URLError, OSError) as exc:
            raise HorizonsError(f"Horizons network error: {exc}") from exc
        return payload.decode("utf-8", errors="replace")

    def query(self, params: Params) -> List[str]:
        """Fetch, unwrap and split the response into lines."""

        lines = unwrap_envelope(self.fetch(params)).split("\n")
        for line in lines:
            LOGGER.debug("%s", line)
        return lines


__all__ = [
    "HorizonsError",
    "HorizonsRequestError",
    "HorizonsSource",
    "Params",
    "elements_query",
    "format_horizons_time",
    "major_bodies_query",
    "properties_query",
    "unwrap_envelope",
    "vector_query",
]
