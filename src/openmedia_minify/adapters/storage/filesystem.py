"""Scratch workspace adapter using the local filesystem."""

import logging
import os
import shutil
from collections.abc import Iterable
from datetime import date
from pathlib import Path

from ...domain.errors import WorkspaceError, WriteError
from ...domain.naming import malformed_name
from ...ports.workspace import WorkspacePort

logger = logging.getLogger(__name__)

WORKSPACE_PREFIX = "openmedia-minify-tmp"


def workspace_name(day: date | None = None, pid: int | None = None) -> str:
    """Deterministic per-run directory name: prefix_YYYYMMDD_pid."""
    day = day or date.today()
    pid = os.getpid() if pid is None else pid
    return f"{WORKSPACE_PREFIX}_{day:%Y%m%d}_{pid}"


class FilesystemWorkspace(WorkspacePort):
    """Workspace implementation using a directory under ``base_path``."""

    def __init__(self, base_path: Path, name: str | None = None) -> None:
        self.base_path = base_path
        self._path = base_path / (name or workspace_name())

    @property
    def path(self) -> Path:
        return self._path

    def prepare(self) -> Path:
        try:
            if self._path.exists():
                logger.warning(f"Removing stale workspace: {self._path}")
                shutil.rmtree(self._path)
            self._path.mkdir(parents=True)
        except OSError as e:
            raise WorkspaceError(f"Creating workspace {self._path} failed: {e}") from e

        logger.debug(f"Workspace ready: {self._path}")
        return self._path

    def write_lines(self, name: str, lines: Iterable[str]) -> Path:
        dest = self._path / name
        try:
            if dest.exists():
                dest.unlink()
            with open(dest, "w", encoding="utf-8", newline="\n") as f:
                for line in lines:
                    f.write(line)
                    f.write("\n")
        except OSError as e:
            raise WriteError(f"Failed to save file {dest}: {e}") from e

        return dest

    def mark_corrupt(self, path: Path) -> Path:
        dest = malformed_name(path)
        try:
            path.replace(dest)
        except OSError as e:
            raise WriteError(f"Error renaming file {path}: {e}") from e

        logger.warning(f"Marked malformed: {dest.name}")
        return dest

    def remove(self) -> None:
        if not self._path.exists():
            return
        try:
            shutil.rmtree(self._path)
        except OSError as e:
            # Called from a finally block, never raises
            logger.error(f"Removing workspace {self._path} failed: {e}")
            return
        logger.debug(f"Workspace removed: {self._path}")
