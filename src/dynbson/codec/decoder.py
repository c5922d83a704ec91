"""BSON decoder for dynamic values.

This module provides DocumentToValueConverter, which walks a BSON document and
rebuilds a host value tree, and the decode() convenience function.
"""

from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..exceptions import DecodeError
from ..models.options import DecoderOptions, coerce_options
from .builder import DocumentReader
from .elements import EMPTY_DOCUMENT_SIZE, ElementType

logger = logging.getLogger(__name__)


class DocumentToValueConverter:
    """Converts a BSON document into a host value tree.

    Container shapes are chosen by DecoderOptions.

    Example:
        >>> value = DocumentToValueConverter(data).convert()
        >>> value = DocumentToValueConverter(data, {"array_type": "dict"}).convert()
    """

    def __init__(
        self,
        data: bytes,
        options: Union[DecoderOptions, Mapping[str, Any], None] = None,
    ) -> None:
        self._data = bytes(data)
        self._options = coerce_options(DecoderOptions, options)

    def convert(self) -> Any:
        """Decode the whole buffer as one top-level document.

        Raises:
            DecodeError: If the data is truncated, malformed, or has trailing bytes
        """
        reader = DocumentReader(self._data)
        pairs = self._read_document(reader)
        if reader.bytes_remaining():
            raise DecodeError(
                f"Trailing data after document: {reader.bytes_remaining()} bytes"
            )
        return self._build_document(pairs, self._options.root_type)

    def _read_document(self, reader: DocumentReader) -> List[Tuple[str, Any]]:
        start = reader.position()
        try:
            length = reader.read_int32()
        except IndexError as e:
            raise DecodeError(f"Truncated data while reading document length: {e}") from e

        if length < EMPTY_DOCUMENT_SIZE:
            raise DecodeError(f"Invalid document length {length} at offset {start}")
        end = start + length
        if end > len(self._data):
            raise DecodeError(
                f"Document length {length} at offset {start} exceeds available data"
            )
        if self._data[end - 1] != 0:
            raise DecodeError(f"Missing null-terminator in document at offset {start}")

        pairs: List[Tuple[str, Any]] = []
        while reader.position() < end - 1:
            name = None
            try:
                tag = reader.read_byte()
                name = self._decode_utf8(reader.read_cstring(), "element name")
                value = self._read_value(reader, tag, name)
            except IndexError as e:
                where = "element" if name is None else f"element {name!r}"
                raise DecodeError(f"Truncated data while decoding {where}: {e}") from e
            if reader.position() > end - 1:
                raise DecodeError(f"Element {name!r} overruns its enclosing document")
            pairs.append((name, value))

        # skip the terminator
        reader.read_byte()
        return pairs

    def _read_value(self, reader: DocumentReader, tag: int, name: str) -> Any:
        if tag == ElementType.DOUBLE:
            return reader.read_double()
        if tag == ElementType.STRING:
            length = reader.read_int32()
            if length < 1:
                raise DecodeError(f"Element {name!r}: invalid string length {length}")
            raw = reader.read_bytes(length)
            if raw[-1] != 0:
                raise DecodeError(f"Element {name!r}: string is not null-terminated")
            return self._decode_utf8(raw[:-1], f"string value of {name!r}")
        if tag == ElementType.DOCUMENT:
            pairs = self._read_document(reader)
            return self._build_document(pairs, self._options.document_type)
        if tag == ElementType.ARRAY:
            pairs = self._read_document(reader)
            return self._build_array(pairs, name)
        if tag == ElementType.BINARY:
            length = reader.read_int32()
            if length < 0:
                raise DecodeError(f"Element {name!r}: invalid binary length {length}")
            reader.read_byte()  # subtype
            return reader.read_bytes(length)
        if tag == ElementType.UNDEFINED:
            return None
        if tag == ElementType.BOOLEAN:
            flag = reader.read_byte()
            if flag not in (0, 1):
                raise DecodeError(f"Element {name!r}: invalid boolean byte {flag:#04x}")
            return flag == 1
        if tag == ElementType.NULL:
            return None
        if tag == ElementType.INT32:
            return reader.read_int32()
        if tag == ElementType.INT64:
            return reader.read_int64()
        raise DecodeError(f"Element {name!r}: unknown element type {tag:#04x}")

    def _build_document(self, pairs: List[Tuple[str, Any]], shape: str) -> Any:
        if shape == "namespace":
            return SimpleNamespace(**dict(pairs))
        result: Dict[Any, Any] = {}
        for name, value in pairs:
            result[self._document_key(name)] = value
        return result

    def _build_array(self, pairs: List[Tuple[str, Any]], name: str) -> Any:
        for index, (key, _value) in enumerate(pairs):
            if key != str(index):
                raise DecodeError(
                    f"Array {name!r}: expected key {str(index)!r}, got {key!r}"
                )
        values = [value for _key, value in pairs]
        if self._options.array_type == "dict":
            return dict(enumerate(values))
        return values

    def _document_key(self, name: str) -> Union[int, str]:
        if self._options.numeric_keys and _is_decimal_key(name):
            return int(name)
        return name

    @staticmethod
    def _decode_utf8(raw: bytes, what: str) -> str:
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 in {what}: {e}") from e


def _is_decimal_key(name: str) -> bool:
    """Return True for canonical decimal integers ("0", "12", "-3"; not "01" or "+1")."""
    digits = name[1:] if name.startswith("-") else name
    if not digits.isascii() or not digits.isdigit():
        return False
    if digits.startswith("0"):
        return name == "0"
    return True


def decode(
    data: bytes,
    options: Optional[Union[DecoderOptions, Mapping[str, Any]]] = None,
) -> Any:
    """Decode a BSON document to a host value.

    Args:
        data: BSON document bytes
        options: DecoderOptions, or a mapping of option values

    Returns:
        Decoded value (a dict unless options.root_type says otherwise)

    Raises:
        DecodeError: If data is truncated, corrupted, or uses an unsupported element type

    Examples:
        ```python
        from dynbson import decode, encode

        data = encode({"tags": [1, 2]})
        decode(data)                          # {"tags": [1, 2]}
        decode(data, {"array_type": "dict"})  # {"tags": {0: 1, 1: 2}}
        ```
    """
    value = DocumentToValueConverter(data, options).convert()
    logger.debug("Decoded %d bytes into %s", len(data), type(value).__name__)
    return value
