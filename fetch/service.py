"""High level Horizons queries: transport with retries, then decoding."""
from __future__ import annotations

import datetime as dt
import time
from typing import Callable, List, Optional

from fetch.sources import (
    HorizonsError,
    HorizonsRequestError,
    HorizonsSource,
    Params,
    elements_query,
    major_bodies_query,
    properties_query,
    vector_query,
)
from horizons_fetcher.config import DEFAULT_BACKOFF, DEFAULT_CENTER, DEFAULT_RETRIES, AppConfig
from horizons_fetcher.core import (
    Body,
    OrbitalElementsItem,
    Properties,
    VectorItem,
    parse_catalog,
    parse_orbital_elements,
    parse_properties,
    parse_vectors,
)
from horizons_fetcher.logging import get_logger, log_context

LOGGER = get_logger("fetch.service")


class RetryExhausted(HorizonsError):
    """Every attempt to reach Horizons failed; the last error is chained."""

    def __init__(self, attempts: int, last_error: Exception) -> None:
        super().__init__(f"Horizons query failed after {attempts} attempt(s): {last_error}")
        self.attempts = attempts
        self.last_error = last_error


class HorizonsService:
    """Runs queries against a :class:`HorizonsSource` and decodes the result.

    Transport failures are retried ``retries`` times in total with a fixed
    ``backoff`` pause. Rejected queries (:class:`HorizonsRequestError`) and
    decoding errors are raised at once: the same request would fail again.
    """

    def __init__(
        self,
        source: Optional[HorizonsSource] = None,
        retries: int = DEFAULT_RETRIES,
        backoff: float = DEFAULT_BACKOFF,
        center: str = DEFAULT_CENTER,
        sleeper: Optional[Callable[[float], None]] = None,
    ) -> None:
        if retries < 1:
            raise ValueError("retries must be at least 1")
        self.source = source or HorizonsSource()
        self.retries = retries
        self.backoff = backoff
        self.center = center
        self._sleep = sleeper or time.sleep

    @classmethod
    def from_config(cls, config: AppConfig, source: Optional[HorizonsSource] = None) -> "HorizonsService":
        source = source or HorizonsSource(
            url=config.api_url,
            user_agent=config.user_agent,
            timeout=config.timeout,
        )
        return cls(source=source, retries=config.retries, backoff=config.backoff, center=config.center)

    def query_lines(self, params: Params) -> List[str]:
        last_exc: Optional[HorizonsError] = None
        for attempt in range(1, self.retries + 1):
            try:
                return self.source.query(params)
            except HorizonsRequestError as exc:
                LOGGER.error("Horizons rejected the query", extra={"attempt": attempt, "error": str(exc)})
                raise
            except HorizonsError as exc:
                last_exc = exc
                if attempt == self.retries:
                    break
                LOGGER.warning(
                    "Horizons query failed, retrying",
                    extra={"attempt": attempt, "error": str(exc), "backoff": self.backoff},
                )
                self._sleep(self.backoff)
        assert last_exc is not None
        LOGGER.error("Horizons query failed", extra={"attempts": self.retries, "error": str(last_exc)})
        raise RetryExhausted(self.retries, last_exc) from last_exc

    def major_bodies(self) -> List[Body]:
        with log_context(command="MB"):
            return list(parse_catalog(self.query_lines(major_bodies_query())))

    def ephemeris_vector(self, body_id: int, start: dt.datetime, stop: dt.datetime) -> List[VectorItem]:
        """Position and velocity of ``body_id`` relative to the configured center."""

        with log_context(command=body_id, ephem_type="VECTORS"):
            lines = self.query_lines(vector_query(body_id, start, stop, self.center))
            return list(parse_vectors(lines))

    def ephemeris_orbital_elements(
        self, body_id: int, start: dt.datetime, stop: dt.datetime
    ) -> List[OrbitalElementsItem]:
        with log_context(command=body_id, ephem_type="ELEMENTS"):
            lines = self.query_lines(elements_query(body_id, start, stop, self.center))
            return list(parse_orbital_elements(lines))

    def geophysical_properties(self, body_id: int) -> Properties:
        """Raises :class:`~horizons_fetcher.core.PropertyNotFound` for massless bodies."""

        with log_context(command=body_id, obj_data="YES"):
            return parse_properties(self.query_lines(properties_query(body_id)))


__all__ = ["HorizonsService", "RetryExhausted"]
