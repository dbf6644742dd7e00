"""Decoder for the major-body catalog listing (``COMMAND=MB``)."""

from __future__ import annotations

from typing import Iterable, Iterator

from ..logging import get_logger
from .errors import DecodeError
from .slicing import parse_int, take_or_empty
from .types import Body

LOGGER = get_logger("core.catalog")

ID_WIDTH = 9
NAME_WIDTH = 35


def parse_body(line: str) -> Body:
    """Decode one catalog row.

    Columns ``[0, 9)`` hold the id and ``[9, 44)`` the name; names longer
    than the column arrive truncated. Header and footer decoration lines
    raise :class:`~horizons_fetcher.core.errors.NumericParseFailure`.
    """

    id_field, rest = take_or_empty(line, ID_WIDTH)
    name_field, _ = take_or_empty(rest, NAME_WIDTH)
    return Body(id=parse_int(id_field), name=name_field.strip())


def parse_catalog(lines: Iterable[str]) -> Iterator[Body]:
    """Yield a :class:`Body` for every catalog row, dropping all other lines."""

    for line in lines:
        try:
            yield parse_body(line)
        except DecodeError:
            LOGGER.debug("skipping non-catalog line", extra={"line": line})


__all__ = ["parse_body", "parse_catalog"]
