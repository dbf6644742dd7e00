"""``bodies`` sub-command: list the major-body catalog."""
from __future__ import annotations

import argparse

from fetch.sources import HorizonsError

from ..core import Body
from ..logging import get_logger
from . import common

LOGGER = get_logger("cli")


def _render(body: Body) -> str:
    return f"{body.id:>9}  {body.name}"


def run(ns: argparse.Namespace) -> int:
    service = common.build_service(ns)
    try:
        bodies = service.major_bodies()
    except HorizonsError as exc:
        LOGGER.error("bodies failed: %s", exc)
        return common.EXIT_FAILURE

    if ns.name:
        wanted = ns.name.casefold()
        bodies = [body for body in bodies if body.name.casefold() == wanted]
        if not bodies:
            LOGGER.error("no body named %r", ns.name)
            return common.EXIT_FAILURE
    common.emit_records(bodies, ns.json, _render)
    return common.EXIT_OK


def configure_parser(subparsers, config) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("bodies", help="List planets, moons, barycenters and spacecraft.")
    common.add_shared_arguments(parser, config)
    parser.add_argument("--name", help="Only print the body with this exact name (e.g. Earth).")
    parser.set_defaults(handler=run)
    return parser
