"""Exception hierarchy for dynbson.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from DynbsonError for easy catching of any dynbson-specific error.
"""

from __future__ import annotations

from typing import Any


class DynbsonError(Exception):
    """Base exception for all dynbson errors."""

    pass


class EncodeError(DynbsonError):
    """Raised when converting a value to a BSON document fails.

    The conversion is aborted at the first error. Any builder passed to the
    converter is left partially populated and must be discarded.
    """

    pass


class UnsupportedTypeError(EncodeError):
    """Raised when a value has no BSON conversion rule.

    Opaque host objects (anything that is not null, bool, int, float,
    string or a container) land here instead of being silently dropped.
    """

    def __init__(self, key: str | None, value: Any) -> None:
        self.key = key
        self.value = value
        where = "document root" if key is None else f"key {key!r}"
        super().__init__(f"Unsupported type {type(value).__name__} at {where}")


class InvalidRootError(EncodeError):
    """Raised when a scalar is passed as the top-level document."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"Document root must be a container, got {type(value).__name__}"
        )


class KeyEncodingError(EncodeError, ValueError):
    """Raised when a key cannot be written as a BSON element name.

    Examples:
        - Key contains a NUL byte (element names are C strings)
        - Key is not valid UTF-8
        - Key type has no string form (e.g. float, tuple)
    """

    pass


class ValueRangeError(EncodeError):
    """Raised when an integer does not fit in a signed 64-bit BSON int64."""

    pass


class NestingDepthError(EncodeError):
    """Raised when container nesting exceeds EncoderOptions.max_depth."""

    pass


class DecodeError(DynbsonError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Length prefix inconsistent with the buffer
        - Missing document terminator
        - Unknown element type
        - Invalid UTF-8 in a key or string
    """

    pass
