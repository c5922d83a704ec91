"""Pydantic option models for dynbson.

This module provides the option objects consulted by the encoder and decoder.
"""

from __future__ import annotations

from .options import DecoderOptions, EncoderOptions, coerce_options

__all__ = [
    "EncoderOptions",
    "DecoderOptions",
    "coerce_options",
]
