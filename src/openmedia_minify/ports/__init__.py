"""Ports - interfaces for external dependencies."""

from .archiver import ArchiverPort
from .decoder import DecoderPort
from .validator import ValidatorPort
from .workspace import WorkspacePort

__all__ = ["ArchiverPort", "DecoderPort", "ValidatorPort", "WorkspacePort"]
