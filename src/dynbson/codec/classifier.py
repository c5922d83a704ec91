"""Container-kind classification.

Host containers do not distinguish lists from maps at the type level. The key
sequence is the only signal: a container is written as a BSON array only when
its keys are exactly 0, 1, ..., n-1 in iteration order.
"""

from __future__ import annotations

import enum
from typing import Any

from ..values import iter_items


class ContainerKind(enum.Enum):
    """Framing chosen for a container."""

    ARRAY = "array"
    DOCUMENT = "document"


def is_packed_sequence(container: Any) -> bool:
    """Return True if the container's keys are exactly 0..n-1 in order.

    Any string key, gap, out-of-order or duplicate key makes it False.
    An empty container is packed.

    Examples:
        >>> is_packed_sequence([1, 2, 3])
        True
        >>> is_packed_sequence({0: "a", 2: "b"})
        False
        >>> is_packed_sequence({})
        True
    """
    expected = 0
    for key, _value in iter_items(container):
        if not isinstance(key, int) or key != expected:
            return False
        expected += 1
    return True


def container_kind(container: Any) -> ContainerKind:
    """Decide array vs document framing in one pass over the container."""
    if is_packed_sequence(container):
        return ContainerKind.ARRAY
    return ContainerKind.DOCUMENT
