"""Line-level minification of as-run logs.

Works on plain text lines, not on a parsed tree: a line is classified by
literal marker containment only.
"""

import logging
from collections.abc import Iterable

from .models import FilterResult, LineDecision

logger = logging.getLogger(__name__)

EMPTY_MARKER = 'IsEmpty = "yes"'
FIELD_TAG = "OM_FIELD"
CONTAINER_TAGS = ("OM_HEADER", "OM_OBJECT", "OM_RECORD")
DECLARATION = "<?xml"
SOURCE_ENCODING = "UTF-16"
TARGET_ENCODING = "UTF-8"


def is_empty_field(line: str) -> bool:
    """True for an empty OM_FIELD line that is not also a container line."""
    return (
        EMPTY_MARKER in line
        and FIELD_TAG in line
        and not any(tag in line for tag in CONTAINER_TAGS)
    )


def classify_line(line: str, first: bool) -> LineDecision:
    """Decide whether to keep a line.

    ``first`` is True while no line of the current file has been kept yet;
    a document declaration is only kept in that position.
    """
    text = line.replace(SOURCE_ENCODING, TARGET_ENCODING)
    if is_empty_field(line):
        return LineDecision(kept=False, text=text)
    if DECLARATION in line and not first:
        return LineDecision(kept=False, text=text)
    return LineDecision(kept=True, text=text)


def filter_lines(lines: Iterable[str], name: str = "") -> FilterResult:
    """Drop empty fields and duplicate declarations from one file's lines."""
    result = FilterResult()
    for line in lines:
        decision = classify_line(line, first=result.kept == 0)
        if decision.kept:
            result.lines.append(decision.text)
            result.kept += 1
        else:
            result.dropped += 1

    label = f"{name}: " if name else ""
    logger.info(
        f"{label}Document minified from {result.total} lines to {result.kept} lines, "
        f"ratio: {result.ratio:.2f}%"
    )
    return result
