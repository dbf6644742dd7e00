"""``vectors`` and ``elements`` sub-commands."""
from __future__ import annotations

import argparse
import datetime as dt
from typing import Any

from fetch.sources import HorizonsError

from ..core import DecodeError
from ..logging import get_logger
from ..units import to_si
from . import common

LOGGER = get_logger("cli")


def _render_vector(item: Any) -> str:
    stamp = item.time.isoformat() if item.time else "-"
    position = " ".join(f"{value!s:>24}" for value in item.position)
    velocity = " ".join(f"{value!s:>24}" for value in item.velocity)
    return f"{stamp}  {position}  {velocity}"


def _render_elements(item: Any) -> str:
    stamp = item.time.isoformat() if item.time else "-"
    return (
        f"{stamp}  e={item.eccentricity} q={item.periapsis_distance} i={item.inclination} "
        f"a={item.semi_major_axis} period={item.sidereal_period}"
    )


def _run(ns: argparse.Namespace, ephem_type: str) -> int:
    if ns.stop <= ns.start:
        LOGGER.error("--stop must be after --start")
        return common.EXIT_USAGE
    service = common.build_service(ns)
    try:
        if ephem_type == "vectors":
            items = service.ephemeris_vector(ns.id, ns.start, ns.stop)
            render = _render_vector
        else:
            items = service.ephemeris_orbital_elements(ns.id, ns.start, ns.stop)
            render = _render_elements
    except (HorizonsError, DecodeError) as exc:
        LOGGER.error("%s failed for %s: %s", ephem_type, ns.id, exc)
        return common.EXIT_FAILURE

    if ns.si:
        items = [to_si(item) for item in items]
    common.emit_records(items, ns.json, render)
    return common.EXIT_OK


def run_vectors(ns: argparse.Namespace) -> int:
    return _run(ns, "vectors")


def run_elements(ns: argparse.Namespace) -> int:
    return _run(ns, "elements")


def _add_window_arguments(parser: argparse.ArgumentParser, config) -> None:
    now = dt.datetime.now(dt.timezone.utc).replace(microsecond=0)
    parser.add_argument("id", type=int, help="Horizons body id (e.g. 399 for Earth).")
    parser.add_argument(
        "--start",
        type=common.parse_datetime,
        default=now - dt.timedelta(days=1),
        help="Window start (ISO 8601, UTC when no offset is given).",
    )
    parser.add_argument(
        "--stop",
        type=common.parse_datetime,
        default=now,
        help="Window stop (ISO 8601, UTC when no offset is given).",
    )
    parser.add_argument("--center", default=config.center, help="Coordinate center, e.g. 500@10 for the Sun.")
    parser.add_argument("--si", action="store_true", help="Convert values to SI units.")


def configure_parser(subparsers, config) -> None:
    vectors = subparsers.add_parser("vectors", help="Position and velocity vectors over a time window.")
    common.add_shared_arguments(vectors, config)
    _add_window_arguments(vectors, config)
    vectors.set_defaults(handler=run_vectors)

    elements = subparsers.add_parser("elements", help="Osculating orbital elements over a time window.")
    common.add_shared_arguments(elements, config)
    _add_window_arguments(elements, config)
    elements.set_defaults(handler=run_elements)
