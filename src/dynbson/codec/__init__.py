"""BSON codec for dynamic values.

This module provides the encoder, the decoder, the container-kind classifier
and the byte-level document builder/reader they share.
"""

from __future__ import annotations

from .builder import DocumentBuilder, DocumentReader
from .classifier import ContainerKind, container_kind, is_packed_sequence
from .decoder import DocumentToValueConverter, decode
from .elements import ElementType
from .encoder import ValueToDocumentConverter, encode

__all__ = [
    "encode",
    "decode",
    "ValueToDocumentConverter",
    "DocumentToValueConverter",
    "DocumentBuilder",
    "DocumentReader",
    "ContainerKind",
    "container_kind",
    "is_packed_sequence",
    "ElementType",
]
