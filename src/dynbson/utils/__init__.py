"""Utility functions for dynbson.

This module provides size calculation and element layout inspection.
"""

from __future__ import annotations

from .layout import ElementInfo, iter_elements
from .sizing import element_sizes, encoded_size

__all__ = [
    # Sizing functions
    "encoded_size",
    "element_sizes",
    # Layout
    "ElementInfo",
    "iter_elements",
]
