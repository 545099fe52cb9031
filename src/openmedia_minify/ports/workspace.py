"""Workspace port - interface for the scratch output directory."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path


class WorkspacePort(ABC):
    """Interface for the run-local scratch directory."""

    @property
    @abstractmethod
    def path(self) -> Path:
        """Directory holding minified outputs."""
        pass

    @abstractmethod
    def prepare(self) -> Path:
        """Remove a stale workspace and create a fresh one.

        Raises WorkspaceError if the directory cannot be created.
        """
        pass

    @abstractmethod
    def write_lines(self, name: str, lines: Iterable[str]) -> Path:
        """Write lines (newline terminated) to ``name``, replacing any existing file.

        Raises WriteError on failure.
        """
        pass

    @abstractmethod
    def mark_corrupt(self, path: Path) -> Path:
        """Rename ``path`` to its ``_MALFORMED`` name. Returns the new path."""
        pass

    @abstractmethod
    def remove(self) -> None:
        """Delete the workspace and everything in it."""
        pass
