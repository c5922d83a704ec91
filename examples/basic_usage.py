#!/usr/bin/env python3
"""Basic usage example for dynbson.

This example demonstrates:
1. Encoding a dynamic value tree to BSON
2. How array vs document framing is chosen per container
3. Decoding back with different container shapes
4. Calculating document sizes
"""

from __future__ import annotations

from dynbson import (
    UnsupportedTypeError,
    decode,
    element_sizes,
    encode,
    encoded_size,
    is_packed_sequence,
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("dynbson Basic Usage Example")
    print("=" * 60)
    print()

    value = {
        "name": "probe-7",
        "depth_m": 25.5,
        "active": True,
        "readings": [12, 15, 11],
        "sparse": {0: "start", 4: "end"},
        "owner": {"team": "ops"},
    }

    # Framing decisions
    print("1. Classifying containers...")
    for key in ("readings", "sparse", "owner"):
        kind = "array" if is_packed_sequence(value[key]) else "document"
        print(f"   {key}: {kind}")
    print()

    # Sizes
    print("2. Analyzing element sizes...")
    for key, size in element_sizes(value).items():
        print(f"   {key}: {size} bytes")
    print(f"   Total: {encoded_size(value)} bytes")
    print()

    # Encode
    print("3. Encoding...")
    data = encode(value)
    print(f"   {data.hex()}")
    print()

    # Decode
    print("4. Decoding...")
    print(f"   default:      {decode(data)}")
    print(f"   numeric keys: {decode(data, {'numeric_keys': True})['sparse']}")
    print(f"   dict arrays:  {decode(data, {'array_type': 'dict'})['readings']}")
    print()

    # Opaque values are rejected
    print("5. Encoding an opaque object...")
    try:
        encode({"handle": object()})
    except UnsupportedTypeError as e:
        print(f"   Rejected: {e}")
    print()


if __name__ == "__main__":
    main()
