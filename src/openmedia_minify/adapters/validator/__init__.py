"""Validator adapters."""

from .lxml_schema import LxmlValidator

__all__ = ["LxmlValidator"]
