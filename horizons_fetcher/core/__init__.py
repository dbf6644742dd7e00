"""Public API for the Horizons text decoders."""

from .catalog import parse_body, parse_catalog
from .ephemeris import OrbitalElementsParser, VectorParser, parse_orbital_elements, parse_vectors
from .errors import DecodeError, MalformedRecord, NumericParseFailure, PropertyNotFound, UnexpectedPrefix
from .properties import parse_properties
from .slicing import take_expecting, take_or_empty
from .timestamp import parse_timestamp
from .types import Body, OrbitalElementsItem, Properties, VectorItem

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
