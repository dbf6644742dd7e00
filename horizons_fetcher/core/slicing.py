"""Fixed-width field extraction for Horizons' column-aligned text.

Horizons formats its tables with fixed column widths that are observed, not
documented, and not byte-exact across every object. None of the helpers here
raise on short input except where a label or number is actually required.
"""

from __future__ import annotations

import re
from typing import Tuple

from .errors import NumericParseFailure, UnexpectedPrefix

_INT_RE = re.compile(r"^[+-]?[0-9]+$")


def take_or_empty(value: str, n: int) -> Tuple[str, str]:
    """Split ``value`` after ``n`` characters, returning what is possible.

    Lines shorter than ``n`` come back whole with an empty remainder.
    """

    if len(value) > n:
        return value[:n], value[n:]
    return value, ""


def take_expecting(value: str, expected: str) -> str:
    """Return what follows ``expected`` at the start of ``value``.

    Raises :class:`UnexpectedPrefix` carrying ``value`` unmodified when the
    leading characters differ or ``value`` is shorter than ``expected``.
    """

    if len(expected) > len(value):
        raise UnexpectedPrefix(value, expected)
    prefix, rest = value[: len(expected)], value[len(expected):]
    if prefix != expected:
        raise UnexpectedPrefix(value, expected)
    return rest


def parse_int(text: str) -> int:
    """Parse a trimmed, optionally signed decimal integer."""

    candidate = text.strip()
    if not _INT_RE.match(candidate):
        raise NumericParseFailure(text, kind="int")
    return int(candidate)


def parse_float(text: str) -> float:
    """Parse a trimmed floating point field such as ``-5.861602653492581E+03``."""

    candidate = text.strip()
    # float() accepts digit-group underscores; the service never emits them.
    if not candidate or "_" in candidate:
        raise NumericParseFailure(text, kind="float")
    try:
        return float(candidate)
    except ValueError as exc:
        raise NumericParseFailure(text, kind="float") from exc


def take_labeled_float(value: str, label: str, width: int) -> Tuple[float, str]:
    """Consume ``label`` followed by a ``width``-character numeric field."""

    rest = take_expecting(value, label)
    field, rest = take_or_empty(rest, width)
    return parse_float(field), rest


__all__ = ["parse_float", "parse_int", "take_expecting", "take_labeled_float", "take_or_empty"]
