"""Scan the free-form object data block for geophysical properties.

Horizons prints the block as two columns of prose and ``label = value``
pairs, e.g.::

    GEOPHYSICAL PROPERTIES (revised May 9, 2022):
     Vol. Mean Radius (km)    = 6371.01+-0.02   Mass x10^24 (kg)= 5.97219+-0.0006

The mass sits in the right-hand column, 45 characters in.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from ..logging import get_logger
from .errors import PropertyNotFound, UnexpectedPrefix
from .slicing import parse_float, parse_int, take_expecting, take_or_empty
from .types import Properties

LOGGER = get_logger("core.properties")

LEFT_MARGIN = 45
MASS_LABEL = "Mass x10^"
MASS_UNIT_LABEL = " (kg)= "
EXPONENT_WIDTH = 2
MANTISSA_WIDTH = 7
UNCERTAINTY_MARKER = "+-"


def parse_properties(lines: Iterable[str]) -> Properties:
    """Return the first labeled mass found in ``lines``.

    Raises :class:`PropertyNotFound` when no line carries a mass, which is
    the normal outcome for barycenters.
    """

    for line in lines:
        _, right = take_or_empty(line, LEFT_MARGIN)
        try:
            rest = take_expecting(right, MASS_LABEL)
        except UnexpectedPrefix:
            continue
        exponent_field, rest = take_or_empty(rest, EXPONENT_WIDTH)
        try:
            rest = take_expecting(rest, MASS_UNIT_LABEL)
        except UnexpectedPrefix:
            continue
        mantissa_field, _ = take_or_empty(rest, MANTISSA_WIDTH)
        mantissa_field = mantissa_field.split(UNCERTAINTY_MARKER, 1)[0]

        exponent = parse_int(exponent_field)
        parse_float(mantissa_field)
        # Scale in decimal so 5.97219 x10^24 is exactly 5.97219e24.
        mass = float(Decimal(mantissa_field.strip()).scaleb(exponent))
        LOGGER.debug("mass found", extra={"mass": mass})
        return Properties(mass=mass)
    raise PropertyNotFound("mass")


__all__ = ["parse_properties"]
