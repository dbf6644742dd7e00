"""Timestamp decoding for ephemeris date lines.

A record's first line looks like::

    2457677.000000000 = A.D. 2016-Oct-15 12:00:00.0000 TDB

The calendar part is Barycentric Dynamical Time. It is returned as UTC with
no correction applied, so values can be off from true UTC by roughly a
minute; consumers that care must correct it themselves.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from .errors import NumericParseFailure
from .slicing import take_expecting, take_or_empty

CALENDAR_PREFIX = "A.D. "
TIMESTAMP_FORMAT = "%Y-%b-%d %H:%M:%S"
# English month names regardless of LC_TIME; ``%b`` follows the process locale.
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_NUMERIC_FORMAT = "%Y-%m-%d %H:%M:%S"
# ``YYYY-Mon-DD HH:MM:SS``; the fractional seconds and time-scale suffix
# that follow vary in width.
TIMESTAMP_WIDTH = 20


def parse_timestamp(line: str) -> Optional[dt.datetime]:
    """Return the calendar stamp of ``line`` as an aware UTC datetime.

    Returns ``None`` when the line has no ``=`` calendar annotation at all.
    Raises :class:`UnexpectedPrefix` when the annotation is not an ``A.D.``
    date and :class:`NumericParseFailure` when the date does not parse.
    """

    parts = line.split("=")
    if len(parts) < 2 or not parts[1].strip():
        return None

    calendar = take_expecting(parts[1].strip(), CALENDAR_PREFIX)
    stamp, _ = take_or_empty(calendar, TIMESTAMP_WIDTH)
    try:
        month = MONTH_ABBREVIATIONS.index(stamp[5:8]) + 1
        parsed = dt.datetime.strptime(f"{stamp[:5]}{month:02d}{stamp[8:]}", _NUMERIC_FORMAT)
    except ValueError as exc:
        raise NumericParseFailure(stamp, kind="timestamp") from exc
    return parsed.replace(tzinfo=dt.timezone.utc)


__all__ = ["CALENDAR_PREFIX", "MONTH_ABBREVIATIONS", "TIMESTAMP_FORMAT", "TIMESTAMP_WIDTH", "parse_timestamp"]
