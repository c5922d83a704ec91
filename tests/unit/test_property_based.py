"""Property-based tests using hypothesis."""

from __future__ import annotations

import string
from typing import Any

from hypothesis import given, settings
from hypothesis import strategies as st

from dynbson import ElementType, decode, encode, is_packed_sequence, iter_elements
from dynbson.values import INT64_MAX, INT64_MIN

scalars = (
    st.none()
    | st.booleans()
    | st.integers(min_value=INT64_MIN, max_value=INT64_MAX)
    | st.floats(allow_nan=False)
    | st.text(max_size=20)
)
names = st.text(alphabet=string.ascii_letters + "_", min_size=1, max_size=8)
values = st.recursive(
    scalars,
    lambda children: st.lists(children, max_size=4)
    # an empty mapping is packed and comes back as an empty list
    | st.dictionaries(names, children, min_size=1, max_size=4),
    max_leaves=20,
)
documents = st.dictionaries(names, values, max_size=6)

int_keyed = st.dictionaries(st.integers(min_value=-3, max_value=6), scalars, max_size=6)


def _max_depth(value: Any) -> int:
    if isinstance(value, dict):
        return 1 + max((_max_depth(v) for v in value.values()), default=0)
    if isinstance(value, list):
        return 1 + max((_max_depth(v) for v in value), default=0)
    return 0


class TestCodecProperties:
    """Property-based tests for codec."""

    @settings(deadline=None)
    @given(doc=documents)
    def test_encode_decode_roundtrip(self, doc: dict[str, Any]) -> None:
        """Test encode/decode is invertible for lists and string-keyed maps."""
        assert decode(encode(doc)) == doc

    @settings(deadline=None)
    @given(doc=documents)
    def test_encode_deterministic(self, doc: dict[str, Any]) -> None:
        """Test encoding is deterministic."""
        assert encode(doc) == encode(doc)

    @settings(deadline=None)
    @given(doc=documents)
    def test_length_prefix_matches(self, doc: dict[str, Any]) -> None:
        """Test the length prefix covers the whole buffer."""
        data = encode(doc)
        assert int.from_bytes(data[:4], "little", signed=True) == len(data)
        assert data[-1] == 0

    @settings(deadline=None)
    @given(doc=documents)
    def test_nesting_depth_preserved(self, doc: dict[str, Any]) -> None:
        """Test decoding reproduces the exact nesting depth."""
        assert _max_depth(decode(encode(doc))) == _max_depth(doc)

    @given(container=int_keyed)
    def test_int_keyed_roundtrip(self, container: dict[int, Any]) -> None:
        """Test integer-keyed containers come back with the host key normalisation."""
        data = encode({"c": container})
        decoded = decode(data, {"array_type": "dict", "numeric_keys": True})
        assert decoded == {"c": container}

    @given(container=int_keyed)
    def test_framing_follows_classifier(self, container: dict[int, Any]) -> None:
        """Test array framing is used exactly when the container is packed."""
        first = next(iter_elements(encode({"c": container})))
        expected = ElementType.ARRAY if is_packed_sequence(container) else ElementType.DOCUMENT
        assert first.element_type is expected


class TestClassifierProperties:
    """Property-based tests for the packed-sequence heuristic."""

    @given(container=int_keyed)
    def test_packed_iff_dense_in_order(self, container: dict[int, Any]) -> None:
        expected = list(container) == list(range(len(container)))
        assert is_packed_sequence(container) is expected

    @given(items=st.lists(scalars, max_size=10))
    def test_lists_always_packed(self, items: list[Any]) -> None:
        assert is_packed_sequence(items) is True
        assert is_packed_sequence(dict(enumerate(items))) is True

    @given(container=st.dictionaries(names, scalars, min_size=1, max_size=6))
    def test_string_keys_never_packed(self, container: dict[str, Any]) -> None:
        assert is_packed_sequence(container) is False

    @given(container=int_keyed)
    def test_idempotent(self, container: dict[int, Any]) -> None:
        assert is_packed_sequence(container) == is_packed_sequence(container)
