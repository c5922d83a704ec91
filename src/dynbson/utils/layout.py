"""Element layout inspection.

This module walks a BSON buffer without building values, reporting where each
element sits and how many bytes it occupies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from ..codec.builder import DocumentReader
from ..codec.elements import EMPTY_DOCUMENT_SIZE, ElementType
from ..exceptions import DecodeError

_FIXED_PAYLOAD_SIZES = {
    ElementType.DOUBLE: 8,
    ElementType.UNDEFINED: 0,
    ElementType.BOOLEAN: 1,
    ElementType.NULL: 0,
    ElementType.INT32: 4,
    ElementType.INT64: 8,
}


@dataclass(frozen=True)
class ElementInfo:
    """Location of one element inside a document.

    Attributes:
        element_type: Type tag
        name: Element name
        offset: Byte offset of the type tag in the buffer
        size: Total bytes of the element (tag, name and payload)
        depth: Nesting level, 0 for top-level elements
        path: Dotted path of names from the root
    """

    element_type: ElementType
    name: str
    offset: int
    size: int
    depth: int
    path: str

    @property
    def is_container(self) -> bool:
        return self.element_type in (ElementType.DOCUMENT, ElementType.ARRAY)


def iter_elements(data: bytes, recursive: bool = True) -> Iterator[ElementInfo]:
    """Yield ElementInfo for every element of a BSON document in byte order.

    Args:
        data: BSON document bytes
        recursive: Also descend into embedded documents and arrays

    Raises:
        DecodeError: If the buffer is malformed or uses an unknown element type
    """
    data = bytes(data)
    reader = DocumentReader(data)
    try:
        yield from _walk(data, reader, len(data), 0, None, recursive)
    except IndexError as e:
        raise DecodeError(f"Truncated data: {e}") from e
    if reader.bytes_remaining():
        raise DecodeError(f"Trailing data after document: {reader.bytes_remaining()} bytes")


def _walk(
    data: bytes,
    reader: DocumentReader,
    limit: int,
    depth: int,
    prefix: Optional[str],
    recursive: bool,
) -> Iterator[ElementInfo]:
    start = reader.position()
    length = reader.read_int32()
    end = start + length
    if length < EMPTY_DOCUMENT_SIZE or end > limit:
        raise DecodeError(f"Invalid document length {length} at offset {start}")
    if data[end - 1] != 0:
        raise DecodeError(f"Missing null-terminator in document at offset {start}")

    while reader.position() < end - 1:
        offset = reader.position()
        raw_tag = reader.read_byte()
        try:
            element_type = ElementType(raw_tag)
        except ValueError as e:
            raise DecodeError(f"Unknown element type {raw_tag:#04x} at offset {offset}") from e
        name = reader.read_cstring().decode("utf-8", errors="replace")
        path = name if prefix is None else f"{prefix}.{name}"
        payload_start = reader.position()

        if element_type in (ElementType.DOCUMENT, ElementType.ARRAY):
            body_length = DocumentReader(data, payload_start).read_int32()
            # nested body must end before the enclosing terminator
            if body_length < EMPTY_DOCUMENT_SIZE or payload_start + body_length > end - 1:
                raise DecodeError(
                    f"Element {path!r}: invalid {element_type.label} length "
                    f"{body_length} at offset {payload_start}"
                )
            size = payload_start - offset + body_length
            yield ElementInfo(element_type, name, offset, size, depth, path)
            if recursive:
                yield from _walk(data, reader, end - 1, depth + 1, path, recursive)
            else:
                reader.read_bytes(body_length)
            continue

        if element_type is ElementType.STRING:
            payload_size = 4 + reader.read_int32()
        elif element_type is ElementType.BINARY:
            payload_size = 5 + reader.read_int32()
        else:
            payload_size = _FIXED_PAYLOAD_SIZES[element_type]
        if payload_start + payload_size < reader.position():
            raise DecodeError(f"Element {path!r}: invalid payload length at offset {offset}")
        reader.read_bytes(payload_start + payload_size - reader.position())
        if reader.position() > end - 1:
            raise DecodeError(f"Element {path!r} overruns its enclosing document")

        size = payload_start - offset + payload_size
        yield ElementInfo(element_type, name, offset, size, depth, path)

    reader.read_byte()
