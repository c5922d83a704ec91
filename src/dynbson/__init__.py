"""dynbson: BSON codec for dynamic values

A Python library that converts dynamically-typed values (None, bool, int,
float, str, and ordered keyed containers) to and from BSON documents.

Key Features:
- Array vs document framing decided from the container's key sequence
- Byte-exact BSON output (int64 for every int, double for every float)
- Typed errors for opaque objects, scalar roots and unencodable keys
- Pydantic-validated encoder/decoder options

Quick Start:
    >>> from dynbson import encode, decode
    >>>
    >>> data = encode({"name": "x", "scores": [1, 2, 3], "sparse": {0: "a", 2: "b"}})
    >>> decode(data)
    {'name': 'x', 'scores': [1, 2, 3], 'sparse': {'0': 'a', '2': 'b'}}
    >>> decode(data, {"numeric_keys": True})["sparse"]
    {0: 'a', 2: 'b'}
"""

from __future__ import annotations

from .codec import (
    ContainerKind,
    DocumentBuilder,
    DocumentReader,
    DocumentToValueConverter,
    ElementType,
    ValueToDocumentConverter,
    container_kind,
    decode,
    encode,
    is_packed_sequence,
)
from .exceptions import (
    DecodeError,
    DynbsonError,
    EncodeError,
    InvalidRootError,
    KeyEncodingError,
    NestingDepthError,
    UnsupportedTypeError,
    ValueRangeError,
)
from .models import DecoderOptions, EncoderOptions
from .utils import ElementInfo, element_sizes, encoded_size, iter_elements
from .values import ValueKind, value_kind

__version__ = "0.1.0"

__all__ = [
    # Core API
    "encode",
    "decode",
    "ValueToDocumentConverter",
    "DocumentToValueConverter",
    "DocumentBuilder",
    "DocumentReader",
    # Classification
    "ContainerKind",
    "container_kind",
    "is_packed_sequence",
    "ValueKind",
    "value_kind",
    "ElementType",
    # Options
    "EncoderOptions",
    "DecoderOptions",
    # Exceptions
    "DynbsonError",
    "EncodeError",
    "UnsupportedTypeError",
    "InvalidRootError",
    "KeyEncodingError",
    "ValueRangeError",
    "NestingDepthError",
    "DecodeError",
    # Sizing / layout
    "encoded_size",
    "element_sizes",
    "ElementInfo",
    "iter_elements",
    # Version
    "__version__",
]
