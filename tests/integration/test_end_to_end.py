"""End-to-end integration tests."""

from __future__ import annotations

from typing import Any

import pytest

from dynbson import (
    DecoderOptions,
    DocumentBuilder,
    EncoderOptions,
    UnsupportedTypeError,
    ValueToDocumentConverter,
    decode,
    element_sizes,
    encode,
    encoded_size,
    iter_elements,
)


class Cursor:
    """Stand-in for a host object handed to the codec by mistake."""


@pytest.fixture
def command_document() -> dict[str, Any]:
    """A query command as a scripting host would build it."""
    return {
        "find": "vehicles",
        "filter": {"depth": {"$gt": 100}, "active": True},
        "projection": {"_id": 0, "name": 1},
        "sort": [["depth", -1]],
        "limit": 10,
        "readConcern": {"level": None},
        # host array with a hole in it
        "hint": {0: "depth", 3: "name"},
    }


class TestEndToEndWorkflow:
    """Test complete end-to-end workflows."""

    def test_command_workflow(self, command_document: dict[str, Any]) -> None:
        """Test complete command document workflow."""
        # 1. Check encoded size
        size = encoded_size(command_document)
        sizes = element_sizes(command_document)
        assert sum(sizes.values()) + 5 == size

        # 2. Encode
        data = encode(command_document, EncoderOptions(max_depth=8))
        assert len(data) == size

        # 3. Framing decisions per nesting level
        framing = {info.path: info.element_type.label for info in iter_elements(data)}
        assert framing["filter"] == "document"
        assert framing["projection"] == "document"
        assert framing["sort"] == "array"
        assert framing["sort.0"] == "array"
        assert framing["hint"] == "document"

        # 4. Decode with host-style key normalisation
        decoded = decode(data, DecoderOptions(numeric_keys=True))
        assert decoded["hint"] == {0: "depth", 3: "name"}
        assert decoded["sort"] == [["depth", -1]]
        assert decoded["filter"] == {"depth": {"$gt": 100}, "active": True}
        assert decoded["readConcern"] == {"level": None}

    def test_reencode_is_stable(self, command_document: dict[str, Any]) -> None:
        """Decoding then re-encoding yields identical bytes."""
        data = encode(command_document)
        assert encode(decode(data)) == data

    def test_failed_encode_is_discarded(self, command_document: dict[str, Any]) -> None:
        """A failed conversion raises and the caller drops the builder."""
        command_document["cursor"] = Cursor()
        builder = DocumentBuilder()
        with pytest.raises(UnsupportedTypeError) as excinfo:
            ValueToDocumentConverter(command_document, builder).convert()
        assert excinfo.value.key == "cursor"

        # everything before the failing key was written, nothing for it
        written = decode(builder.to_bytes())
        assert "cursor" not in written
        assert list(written) == [k for k in command_document if k != "cursor"]
