"""
Parsing and rendering of date/time values.

Stored values use ISO 8601 ('2024-03-01T08:30:00'); read-only rendering uses
the strftime pattern configured for the field's DateTimeType.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from formconf import get_current_settings
from formbinding.enums import DateTimeType

logger = logging.getLogger(__name__)

MICROSECOND = timedelta(microseconds=1)


def parse_iso(text: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 date or date-time, returning None if it is not one."""
    if not text:
        return None
    text = text.strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        parsed = date.fromisoformat(text)
    except ValueError:
        return None
    return datetime(parsed.year, parsed.month, parsed.day)


def to_iso(value: datetime) -> str:
    return value.isoformat()


def ticks_of(value: datetime) -> int:
    """Microseconds elapsed since datetime.min, the step granularity."""
    return (value.replace(tzinfo=None) - datetime.min) // MICROSECOND


def format_read_only(value: datetime, date_time_type: DateTimeType) -> str:
    pattern = get_current_settings().date_time_formats[date_time_type.name]
    if date_time_type is DateTimeType.LOCAL_DATE_AND_TIME and value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime(pattern)


def parse_read_only(text: Optional[str], date_time_type: Optional[DateTimeType] = None) -> Optional[datetime]:
    """Parse a rendered date/time, trying ISO first and then the configured patterns."""
    value = parse_iso(text)
    if value is not None or not text:
        return value
    formats = get_current_settings().date_time_formats
    if date_time_type is not None:
        names = [date_time_type.name]
    else:
        names = list(formats)
    for name in names:
        pattern = formats[name]
        candidates = [(text, pattern)]
        if '%V' in pattern and '%u' not in pattern:
            candidates.append((f"{text}-1", f"{pattern}-%u"))
        for candidate, candidate_pattern in candidates:
            try:
                return datetime.strptime(candidate.strip(), candidate_pattern)
            except ValueError:
                continue
    logger.debug(f"Cannot parse read-only date/time '{text}'")
    return None
