"""Error kinds raised while decoding Horizons text output."""

from __future__ import annotations

from typing import Optional


class DecodeError(ValueError):
    """Base class for every failure raised by the text decoders."""


class UnexpectedPrefix(DecodeError):
    """A column label did not match where it was expected."""

    def __init__(self, text: str, expected: str) -> None:
        super().__init__(f"'{text}' does not contain expected prefix '{expected}'")
        self.text = text
        self.expected = expected


class NumericParseFailure(DecodeError):
    """A sliced field was not valid numeric (or calendar) text."""

    def __init__(self, text: str, kind: str = "float") -> None:
        super().__init__(f"invalid {kind}: '{text}'")
        self.text = text
        self.kind = kind


class PropertyNotFound(DecodeError):
    """No labeled line for the requested property exists in the block.

    Expected for barycenters and other catalog entries that have no
    published mass.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"property '{name}' not found")
        self.name = name


class MalformedRecord(DecodeError):
    """A line inside a multi-line record could not be decoded.

    The field-level failure is chained as ``__cause__``.
    """

    def __init__(self, line_number: int, line: str, reason: Optional[str] = None) -> None:
        message = f"malformed record at line {line_number}: '{line}'"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


__all__ = [
    "DecodeError",
    "MalformedRecord",
    "NumericParseFailure",
    "PropertyNotFound",
    "UnexpectedPrefix",
]
