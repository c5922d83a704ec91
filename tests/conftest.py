"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """Document mixing every encodable variant."""
    return {
        "name": "probe",
        "active": True,
        "count": 42,
        "ratio": 0.5,
        "missing": None,
        "tags": ["a", "b"],
        "meta": {"owner": "ops", "level": 3},
    }


@pytest.fixture
def sparse_container() -> dict[int, str]:
    """Integer-keyed container with a gap at index 1."""
    return {0: "a", 2: "b"}
