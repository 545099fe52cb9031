"""Output and archive file naming."""

from pathlib import Path

from .errors import FilenameError
from .models import DateKey

MALFORMED_SUFFIX = "_MALFORMED"
OUTPUT_EXTENSION = ".xml"


def derive_filename(source_name: str, key: DateKey) -> str:
    """Build ``<seg0>-<seg1>_<Weekday>_Www_YYYY_MM_DD.xml`` from a source name.

    The underscore after the second segment is only added when the source
    name does not already carry one.
    """
    segments = source_name.split("-")
    if len(segments) < 2:
        raise FilenameError(f"Expected at least two '-' separated segments: {source_name}")

    prefix = f"{segments[0]}-{segments[1]}"
    if not prefix.endswith("_"):
        prefix += "_"

    return (
        f"{prefix}{key.weekday}_W{key.week:02d}_"
        f"{key.year:04d}_{key.month:02d}_{key.day:02d}{OUTPUT_EXTENSION}"
    )


def malformed_name(path: Path) -> Path:
    """``X.xml`` -> ``X_MALFORMED.xml`` in the same directory."""
    return path.with_name(f"{path.stem}{MALFORMED_SUFFIX}{OUTPUT_EXTENSION}")


def archive_name(year: int, week: int, kind: str) -> str:
    """Archive name such as ``2024_W11_MINIFIED.zip``."""
    return f"{year:04d}_W{week:02d}_{kind}.zip"
