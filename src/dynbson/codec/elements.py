"""BSON element type tags.

Specifications taken from: http://bsonspec.org/#/specification
"""

from __future__ import annotations

import enum


class ElementType(enum.IntEnum):
    """Type tag byte that prefixes every element."""

    DOUBLE = 0x01
    STRING = 0x02
    DOCUMENT = 0x03
    ARRAY = 0x04
    BINARY = 0x05
    UNDEFINED = 0x06
    BOOLEAN = 0x08
    NULL = 0x0A
    INT32 = 0x10
    INT64 = 0x12

    @property
    def label(self) -> str:
        """Lower-case name used in diagnostics."""
        return self.name.lower()


INT32_MAX = (1 << 31) - 1

# length prefix + terminator
EMPTY_DOCUMENT_SIZE = 5
