"""Command line interface for horizons-fetcher."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from ..config import load_config
from . import bodies, common, ephemeris, properties


def build_parser() -> argparse.ArgumentParser:
    config = load_config()
    parser = argparse.ArgumentParser(
        prog="horizons-fetcher",
        description="Query NASA JPL Horizons and decode its text output.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command")
    bodies.configure_parser(subparsers, config)
    ephemeris.configure_parser(subparsers, config)
    properties.configure_parser(subparsers, config)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one sub-command and return its exit status.

    Bad options and bad ``HORIZONS_*`` settings return
    :data:`~horizons_fetcher.cli.common.EXIT_USAGE` rather than raising.
    """

    try:
        parser = build_parser()
    except ValueError as exc:
        print(f"horizons-fetcher: error: {exc}", file=sys.stderr)
        return common.EXIT_USAGE
    try:
        ns = parser.parse_args(argv)
    except SystemExit as exc:
        # argparse has already printed usage or help.
        return common.EXIT_OK if not exc.code else common.EXIT_USAGE
    if not hasattr(ns, "handler"):
        parser.print_help()
        return common.EXIT_USAGE
    common.configure_logging(ns.log_level, ns.log_format)
    return ns.handler(ns)


def entrypoint() -> None:
    sys.exit(main())


__all__ = ["build_parser", "entrypoint", "main"]
