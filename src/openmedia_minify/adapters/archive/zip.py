"""Archive adapter using zipfile."""

import logging
import zipfile
from pathlib import Path

from ...domain.errors import ArchiveError
from ...ports.archiver import ArchiverPort

logger = logging.getLogger(__name__)


class ZipArchiver(ArchiverPort):
    """Deflate-compressed zip archives with paths relative to the source root."""

    def archive(self, source: Path, target: Path) -> Path:
        logger.info(f"Zipping: {source} to archive: {target}")

        if not source.is_dir():
            raise ArchiveError(target.name, f"source is not a directory: {source}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(
                target, "w", compression=zipfile.ZIP_DEFLATED, strict_timestamps=False
            ) as archive:
                for path in sorted(source.rglob("*")):
                    # Output may live inside the archived tree
                    if path.resolve() == target.resolve():
                        continue
                    # Directories are stored with a trailing slash by ZipFile.write
                    archive.write(path, path.relative_to(source).as_posix())
        except OSError as e:
            target.unlink(missing_ok=True)
            raise ArchiveError(target.name, str(e)) from e

        return target
