"""Archiver port - interface for packaging directory trees."""

from abc import ABC, abstractmethod
from pathlib import Path


class ArchiverPort(ABC):
    """Interface for archive writing."""

    @abstractmethod
    def archive(self, source: Path, target: Path) -> Path:
        """Package the tree under ``source`` into ``target``.

        Entry names are relative to ``source``. Returns the archive path.
        """
        pass
