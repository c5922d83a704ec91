"""Dynamic value model.

Host values are plain Python objects. This module maps them onto the closed
set of variants the codec understands and provides the container iteration
protocol used by the encoder.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any, Iterator, Tuple

from .exceptions import KeyEncodingError

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class ValueKind(enum.Enum):
    """Variants of the dynamic value model."""

    NULL = "null"
    BOOL = "bool"
    INT64 = "int64"
    DOUBLE = "double"
    STRING = "string"
    CONTAINER = "container"
    OPAQUE = "opaque"


def value_kind(value: Any) -> ValueKind:
    """Classify a host value into its variant.

    Args:
        value: Any Python object

    Returns:
        The variant tag. Values with no other shape are OPAQUE.

    Examples:
        >>> value_kind(True)
        <ValueKind.BOOL: 'bool'>
        >>> value_kind({"a": 1})
        <ValueKind.CONTAINER: 'container'>
    """
    if value is None:
        return ValueKind.NULL
    # bool subclasses int, so it has to be tested first
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INT64
    if isinstance(value, float):
        return ValueKind.DOUBLE
    if isinstance(value, (str, bytes, bytearray)):
        return ValueKind.STRING
    if is_container(value):
        return ValueKind.CONTAINER
    return ValueKind.OPAQUE


def is_container(value: Any) -> bool:
    """Return True for values the codec walks as keyed containers."""
    return isinstance(value, (Mapping, list, tuple))


def iter_items(container: Any) -> Iterator[Tuple[Any, Any]]:
    """Yield (key, value) pairs of a container in native order.

    Sequences are keyed by position, mappings by their own keys.
    """
    if isinstance(container, Mapping):
        return iter(container.items())
    return enumerate(container)


def render_key(key: Any) -> str:
    """Render a container key as a BSON element name.

    Integers (bools included) render as decimal ASCII. Bytes keys must be
    valid UTF-8.

    Raises:
        KeyEncodingError: If the key has no valid string form
    """
    if isinstance(key, int):
        return str(int(key))
    if isinstance(key, str):
        return key
    if isinstance(key, (bytes, bytearray)):
        try:
            return bytes(key).decode("utf-8")
        except UnicodeDecodeError as e:
            raise KeyEncodingError(f"Key {key!r} is not valid UTF-8") from e
    raise KeyEncodingError(f"Key of type {type(key).__name__} cannot be used as an element name")
