"""BSON encoder for dynamic values.

This module provides ValueToDocumentConverter, which walks a host value tree
and appends elements into a DocumentBuilder, and the encode() convenience
function that returns the finished document bytes.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from ..exceptions import (
    InvalidRootError,
    NestingDepthError,
    UnsupportedTypeError,
    ValueRangeError,
)
from ..models.options import EncoderOptions, coerce_options
from ..values import INT64_MAX, INT64_MIN, ValueKind, iter_items, render_key, value_kind
from .builder import DocumentBuilder
from .classifier import ContainerKind, container_kind

logger = logging.getLogger(__name__)


class ValueToDocumentConverter:
    """Converts a root container into a BSON document.

    The converter only reads the value tree and only writes to the builder.
    Callers must not mutate the tree while convert() runs. On error the
    builder is left partially populated and must be discarded.

    Example:
        >>> builder = DocumentBuilder()
        >>> ValueToDocumentConverter({"a": [1, 2]}, builder).convert()
        >>> data = builder.to_bytes()
    """

    def __init__(
        self,
        document: Any,
        builder: DocumentBuilder,
        options: Union[EncoderOptions, Mapping[str, Any], None] = None,
    ) -> None:
        self._document = document
        self._builder = builder
        self._options = coerce_options(EncoderOptions, options)

    def convert(self) -> DocumentBuilder:
        """Write the root value's entries as top-level elements.

        The root container's own packed/document classification is ignored:
        the outermost level is always a document.

        Returns:
            The builder passed to the constructor

        Raises:
            UnsupportedTypeError: If the root or any nested value is opaque
            InvalidRootError: If the root is a scalar
            KeyEncodingError: If a key cannot be written as an element name
            ValueRangeError: If an integer does not fit in int64
            NestingDepthError: If nesting exceeds options.max_depth
        """
        kind = value_kind(self._document)
        if kind is ValueKind.OPAQUE:
            raise UnsupportedTypeError(None, self._document)
        if kind is not ValueKind.CONTAINER:
            raise InvalidRootError(self._document)

        self._convert_entries(self._builder, self._document, depth=0)
        return self._builder

    def _convert_entries(self, builder: DocumentBuilder, container: Any, depth: int) -> None:
        for child_key, child_value in iter_items(container):
            self._convert_part(builder, render_key(child_key), child_value, depth)

    def _convert_part(self, builder: DocumentBuilder, key: str, value: Any, depth: int) -> None:
        kind = value_kind(value)

        if kind is ValueKind.NULL:
            builder.append_null(key)
        elif kind is ValueKind.BOOL:
            builder.append_bool(key, value)
        elif kind is ValueKind.INT64:
            if value < INT64_MIN or value > INT64_MAX:
                raise ValueRangeError(
                    f"Key {key!r}: integer {value} does not fit in a signed 64-bit int64"
                )
            builder.append_int64(key, value)
        elif kind is ValueKind.DOUBLE:
            builder.append_double(key, value)
        elif kind is ValueKind.STRING:
            builder.append_string(key, value)
        elif kind is ValueKind.CONTAINER:
            self._convert_container(builder, key, value, depth + 1)
        elif kind is ValueKind.OPAQUE:
            raise UnsupportedTypeError(key, value)
        else:
            raise AssertionError(f"Unhandled value kind: {kind}")

    def _convert_container(
        self, builder: DocumentBuilder, key: str, container: Any, depth: int
    ) -> None:
        max_depth = self._options.max_depth
        if max_depth is not None and depth > max_depth:
            raise NestingDepthError(
                f"Key {key!r}: nesting depth {depth} exceeds max_depth={max_depth}"
            )

        # Framing is decided once, before any child is written, and the same
        # decision closes the frame.
        framing = container_kind(container)

        if framing is ContainerKind.ARRAY:
            child = builder.begin_array(key)
        else:
            child = builder.begin_document(key)

        self._convert_entries(child, container, depth)

        if framing is ContainerKind.ARRAY:
            builder.end_array(child)
        else:
            builder.end_document(child)


def encode(
    value: Any,
    options: Optional[Union[EncoderOptions, Mapping[str, Any]]] = None,
) -> bytes:
    """Encode a container to a BSON document.

    Args:
        value: Root container (mapping, list or tuple)
        options: EncoderOptions, or a mapping of option values

    Returns:
        The BSON document bytes

    Raises:
        EncodeError: If the value cannot be converted (see ValueToDocumentConverter.convert)

    Examples:
        ```python
        from dynbson import encode

        # Mapping with string keys: a document
        data = encode({"name": "x", "tags": ["a", "b"]})

        # Top level is always a document, even for a list
        data = encode([1, 2, 3])  # keys "0", "1", "2"
        ```
    """
    builder = DocumentBuilder()
    ValueToDocumentConverter(value, builder, options).convert()
    data = builder.to_bytes()
    logger.debug(
        "Encoded %s root into %d bytes (%d elements)",
        type(value).__name__,
        len(data),
        builder.element_count(),
    )
    return data
