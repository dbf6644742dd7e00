"""``properties`` sub-command: geophysical properties of one body."""
from __future__ import annotations

import argparse

from fetch.sources import HorizonsError

from ..core import DecodeError, Properties, PropertyNotFound
from ..logging import get_logger
from . import common

LOGGER = get_logger("cli")


def _render(properties: Properties) -> str:
    return f"mass {properties.mass:.6e} kg"


def run(ns: argparse.Namespace) -> int:
    service = common.build_service(ns)
    try:
        properties = service.geophysical_properties(ns.id)
    except PropertyNotFound:
        LOGGER.error("no mass published for body %s", ns.id)
        return common.EXIT_FAILURE
    except (HorizonsError, DecodeError) as exc:
        LOGGER.error("properties failed for %s: %s", ns.id, exc)
        return common.EXIT_FAILURE
    common.emit_records([properties], ns.json, _render)
    return common.EXIT_OK


def configure_parser(subparsers, config) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("properties", help="Geophysical properties (mass) of a body.")
    common.add_shared_arguments(parser, config)
    parser.add_argument("id", type=int, help="Horizons body id (e.g. 399 for Earth).")
    parser.set_defaults(handler=run)
    return parser
