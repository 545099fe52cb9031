"""Archive adapters."""

from .zip import ZipArchiver

__all__ = ["ZipArchiver"]
