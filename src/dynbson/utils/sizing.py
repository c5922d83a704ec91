"""Document size calculation utilities.

This module provides functions to report the encoded size of a value, in total
and per top-level element.
"""

from __future__ import annotations

from typing import Any

from ..codec.encoder import encode
from .layout import iter_elements


def encoded_size(value: Any) -> int:
    """Calculate the encoded size of a value in bytes.

    Args:
        value: Root container to measure

    Returns:
        Size of the BSON document in bytes, including its length prefix
        and terminator

    Raises:
        EncodeError: If the value cannot be encoded

    Example:
        >>> encoded_size({})
        5
        >>> encoded_size({"a": 1})
        16  # 4 + (1 + 2 + 8) + 1
    """
    return len(encode(value))


def element_sizes(value: Any) -> dict[str, int]:
    """Get the encoded size in bytes of each top-level element.

    Each size covers the type tag, the element name and the payload.

    Args:
        value: Root container to analyze

    Returns:
        Dictionary mapping rendered element names to their size in bytes

    Raises:
        EncodeError: If the value cannot be encoded

    Example:
        >>> element_sizes({"a": 1, "b": "xy"})
        {'a': 11, 'b': 10}
    """
    return {
        info.name: info.size for info in iter_elements(encode(value), recursive=False)
    }
