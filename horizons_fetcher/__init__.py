"""
Decoders for NASA JPL Horizons' telnet-style text output.

Horizons answers every query with a human-readable text block: a body
catalog, fixed-column ephemeris tables bounded by ``$$SOE``/``$$EOE``, or a
free-form object data sheet. This package turns those blocks into typed
records:

  - :func:`parse_catalog`          : catalog lines -> :class:`Body`
  - :class:`VectorParser`          : vector table -> :class:`VectorItem`
  - :class:`OrbitalElementsParser` : elements table -> :class:`OrbitalElementsItem`
  - :func:`parse_properties`       : object data -> :class:`Properties`

The ``fetch`` package next to this one issues the HTTP requests; unit
conversion lives in :mod:`horizons_fetcher.units`.

Reference: https://ssd-api.jpl.nasa.gov/doc/horizons.html
"""

from __future__ import annotations

from .core import (
    Body,
    DecodeError,
    MalformedRecord,
    NumericParseFailure,
    OrbitalElementsItem,
    OrbitalElementsParser,
    Properties,
    PropertyNotFound,
    UnexpectedPrefix,
    VectorItem,
    VectorParser,
    parse_body,
    parse_catalog,
    parse_orbital_elements,
    parse_properties,
    parse_timestamp,
    parse_vectors,
    take_expecting,
    take_or_empty,
)

__version__ = "0.5.0"

__all__ = [
    "Body",
    "DecodeError",
    "MalformedRecord",
    "NumericParseFailure",
    "OrbitalElementsItem",
    "OrbitalElementsParser",
    "Properties",
    "PropertyNotFound",
    "UnexpectedPrefix",
    "VectorItem",
    "VectorParser",
    "parse_body",
    "parse_catalog",
    "parse_orbital_elements",
    "parse_properties",
    "parse_timestamp",
    "parse_vectors",
    "take_expecting",
    "take_or_empty",
]
