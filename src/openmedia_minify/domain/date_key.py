"""Date key extraction from the broadcast date field."""

import re
from collections.abc import Iterable
from datetime import date

from .errors import DateKeyError
from .models import DateKey

DATE_FIELD_MARKER = 'FieldID = "1004"'
DATE_PATTERN = re.compile(r"([0-9]{4})([0-9]{2})([0-9]{2})T")


def date_key_from_date(value: date) -> DateKey:
    week_year, week, _ = value.isocalendar()
    return DateKey(
        weekday=value.strftime("%A"),
        year=value.year,
        month=value.month,
        day=value.day,
        week=week,
        week_year=week_year,
    )


def parse_date_line(line: str) -> DateKey:
    """Parse the ``YYYYMMDDT`` timestamp embedded in a date field line."""
    match = DATE_PATTERN.search(line)
    if match is None:
        raise DateKeyError(f"No YYYYMMDDT timestamp in date field: {line.strip()}")
    year, month, day = (int(part) for part in match.groups())
    try:
        value = date(year, month, day)
    except ValueError as e:
        raise DateKeyError(f"Invalid date {match.group(0)[:-1]}: {e}") from e
    return date_key_from_date(value)


def extract_date_key(lines: Iterable[str]) -> DateKey | None:
    """Return the date key of the first date field, or None if there is none.

    Scanning stops at the first line carrying the date field marker.
    """
    for line in lines:
        if DATE_FIELD_MARKER in line:
            return parse_date_line(line)
    return None
