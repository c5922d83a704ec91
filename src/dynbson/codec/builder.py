"""Byte-level BSON document building and reading.

This module provides the growable document buffer the encoder writes into and
the cursor the decoder reads from. All multi-byte values are little-endian.
"""

from __future__ import annotations

import struct
from typing import Optional, Tuple, Union

from ..exceptions import EncodeError, KeyEncodingError
from .elements import EMPTY_DOCUMENT_SIZE, INT32_MAX, ElementType

_INT32 = struct.Struct("<i")
_INT64 = struct.Struct("<q")
_DOUBLE = struct.Struct("<d")


def encode_cstring(name: str) -> bytes:
    """Encode an element name as a NUL-terminated UTF-8 string.

    Raises:
        KeyEncodingError: If the name is not encodable or contains a NUL byte
    """
    try:
        raw = name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise KeyEncodingError(f"Key {name!r} cannot be encoded as UTF-8") from e
    if b"\x00" in raw:
        # The NUL would terminate the name early
        raise KeyEncodingError(f"Element names may not include NUL bytes: {name!r}")
    return raw + b"\x00"


class DocumentBuilder:
    """Appends BSON elements into a growable buffer.

    Nested documents and arrays are written through child builders. A child is
    attached to its parent only when its frame is closed, so an abandoned child
    leaves nothing behind in the parent.

    Example:
        >>> builder = DocumentBuilder()
        >>> builder.append_string("name", "x")
        >>> child = builder.begin_array("tags")
        >>> child.append_int64("0", 1)
        >>> builder.end_array(child)
        >>> data = builder.to_bytes()
    """

    def __init__(self) -> None:
        """Initialize an empty document."""
        self._buffer = bytearray()
        self._count = 0
        self._open_child: Optional[DocumentBuilder] = None
        # (tag, encoded name) this builder will be written under once closed
        self._frame: Optional[Tuple[ElementType, bytes]] = None
        self._parent: Optional[DocumentBuilder] = None

    def _write_header(self, element_type: ElementType, name: str) -> None:
        if self._open_child is not None:
            raise ValueError("Cannot append to a document while a nested frame is open")
        header = bytes((element_type,)) + encode_cstring(name)
        self._buffer += header

    def append_null(self, name: str) -> None:
        """Append a null element."""
        self._write_header(ElementType.NULL, name)
        self._count += 1

    def append_bool(self, name: str, value: bool) -> None:
        """Append a boolean element (one byte, 0x00 or 0x01)."""
        self._write_header(ElementType.BOOLEAN, name)
        self._buffer.append(1 if value else 0)
        self._count += 1

    def append_int64(self, name: str, value: int) -> None:
        """Append a signed 64-bit integer element.

        Raises:
            struct.error: If value does not fit in 64 bits
        """
        payload = _INT64.pack(value)
        self._write_header(ElementType.INT64, name)
        self._buffer += payload
        self._count += 1

    def append_double(self, name: str, value: float) -> None:
        """Append an IEEE-754 double element."""
        payload = _DOUBLE.pack(value)
        self._write_header(ElementType.DOUBLE, name)
        self._buffer += payload
        self._count += 1

    def append_string(self, name: str, value: Union[str, bytes, bytearray]) -> None:
        """Append a UTF-8 string element.

        The length is explicit, so the value may contain NUL bytes. Bytes are
        written verbatim.
        """
        if isinstance(value, str):
            try:
                raw = value.encode("utf-8")
            except UnicodeEncodeError as e:
                raise EncodeError(f"String value for {name!r} cannot be encoded as UTF-8") from e
        else:
            raw = bytes(value)
        if len(raw) + 1 > INT32_MAX:
            raise EncodeError(f"String value for {name!r} exceeds the BSON size limit")
        payload = _INT32.pack(len(raw) + 1) + raw + b"\x00"
        self._write_header(ElementType.STRING, name)
        self._buffer += payload
        self._count += 1

    def begin_document(self, name: str) -> DocumentBuilder:
        """Open a sub-document frame under name and return its builder."""
        return self._begin(ElementType.DOCUMENT, name)

    def end_document(self, child: DocumentBuilder) -> None:
        """Close a frame opened with begin_document()."""
        self._end(ElementType.DOCUMENT, child)

    def begin_array(self, name: str) -> DocumentBuilder:
        """Open an array frame under name and return its builder."""
        return self._begin(ElementType.ARRAY, name)

    def end_array(self, child: DocumentBuilder) -> None:
        """Close a frame opened with begin_array()."""
        self._end(ElementType.ARRAY, child)

    def _begin(self, element_type: ElementType, name: str) -> DocumentBuilder:
        if self._open_child is not None:
            raise ValueError("Cannot open a frame while another nested frame is open")
        child = DocumentBuilder()
        child._frame = (element_type, encode_cstring(name))
        child._parent = self
        self._open_child = child
        return child

    def _end(self, element_type: ElementType, child: DocumentBuilder) -> None:
        if child is not self._open_child or child._parent is not self:
            raise ValueError("Frame being closed was not opened on this document")
        if child._frame is None:
            raise ValueError("Root document has no frame to close")
        frame_type, encoded_name = child._frame
        if frame_type is not element_type:
            raise ValueError(
                f"Cannot close a {frame_type.label} frame as a {element_type.label}"
            )
        body = child.to_bytes()
        self._open_child = None
        child._parent = None
        self._buffer += bytes((element_type,)) + encoded_name + body
        self._count += 1

    def element_count(self) -> int:
        """Return the number of complete elements written at this level."""
        return self._count

    def byte_length(self) -> int:
        """Return the size of the finished document in bytes."""
        return len(self._buffer) + EMPTY_DOCUMENT_SIZE

    def to_bytes(self) -> bytes:
        """Return the length-prefixed, NUL-terminated document.

        Raises:
            EncodeError: If the document exceeds the int32 length prefix
        """
        total = self.byte_length()
        if total > INT32_MAX:
            raise EncodeError(f"Document size ({total} bytes) exceeds the BSON limit")
        return _INT32.pack(total) + bytes(self._buffer) + b"\x00"


class DocumentReader:
    """Reads little-endian BSON primitives from a byte buffer.

    Reads past the end of the buffer raise IndexError; callers translate that
    into DecodeError with context.

    Example:
        >>> reader = DocumentReader(data)
        >>> length = reader.read_int32()
        >>> element_type = reader.read_byte()
        >>> name = reader.read_cstring()
    """

    def __init__(self, data: bytes, position: int = 0) -> None:
        """Initialize a reader over data starting at position."""
        self._data = bytes(data)
        self._position = position

    def _take(self, size: int) -> bytes:
        if size < 0:
            raise ValueError(f"Negative read size: {size}")
        end = self._position + size
        if end > len(self._data):
            raise IndexError(
                f"Not enough bytes: need {size}, have {len(self._data) - self._position}"
            )
        chunk = self._data[self._position:end]
        self._position = end
        return chunk

    def read_byte(self) -> int:
        """Read one unsigned byte."""
        return self._take(1)[0]

    def read_int32(self) -> int:
        """Read a signed 32-bit integer."""
        return _INT32.unpack(self._take(4))[0]

    def read_int64(self) -> int:
        """Read a signed 64-bit integer."""
        return _INT64.unpack(self._take(8))[0]

    def read_double(self) -> float:
        """Read an IEEE-754 double."""
        return _DOUBLE.unpack(self._take(8))[0]

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read raw bytes."""
        return self._take(num_bytes)

    def read_cstring(self) -> bytes:
        """Read a NUL-terminated string, returning it without the terminator."""
        try:
            end = self._data.index(0, self._position)
        except ValueError as e:
            raise IndexError("Unterminated C string") from e
        raw = self._data[self._position:end]
        self._position = end + 1
        return raw

    def bytes_remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self._position

    def position(self) -> int:
        """Return the current read offset."""
        return self._position
