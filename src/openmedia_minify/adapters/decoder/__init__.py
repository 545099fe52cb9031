"""Decoder adapters."""

from .utf16 import Utf16Decoder

__all__ = ["Utf16Decoder"]
