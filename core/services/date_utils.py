"""
Date helpers for the loosely formatted dates of analysis documents.

Documents write dates as DD/MM/YYYY, sometimes prefixed with a duration
("2 semanas - 01/09/2025"). The tracker wants ISO-8601 timestamps.
"""
import re
from datetime import date, datetime, timezone
from typing import Optional

from dateutil import parser as date_parser

_DURATION_PREFIX_RE = re.compile(r'^.* - ')


def strip_duration_prefix(value: str) -> str:
    """Drop a leading "<duration> - " from a date field."""
    return _DURATION_PREFIX_RE.sub('', value.strip())


def _today(now: Optional[datetime] = None) -> date:
    return (now or datetime.now()).date()


def try_parse_date(value: Optional[str]) -> Optional[date]:
    """Parse a document date, or None when it cannot be read.

    DD/MM/YYYY is read day first; anything else goes through dateutil.
    """
    if not value or not value.strip():
        return None

    cleaned = strip_duration_prefix(value)
    parts = cleaned.split("/")
    try:
        if len(parts) == 3:
            day, month, year = (int(part.strip()) for part in parts)
            return date(year, month, day)
        return date_parser.parse(cleaned).date()
    except (ValueError, OverflowError):
        return None


def parse_date_string(value: Optional[str], now: Optional[datetime] = None) -> date:
    """
    Parse a document date, falling back to today.

    Args:
        value: Date text from the document
        now: Reference time, for tests

    Returns:
        Parsed calendar date, or today when empty or unparseable
    """
    return try_parse_date(value) or _today(now)


def convert_date_to_iso(value: Optional[str], now: Optional[datetime] = None) -> str:
    """
    Convert a document date to the ISO-8601 form the tracker accepts.

    Args:
        value: Date text, e.g. "01/09/2025" or "2 semanas - 01/09/2025"
        now: Reference time used when the value cannot be read

    Returns:
        Timestamp like "2025-09-01T00:00:00.000Z"
    """
    if value and value.strip():
        parts = strip_duration_prefix(value).split('/')
        if len(parts) == 3:
            day, month, year = (part.strip() for part in parts)
            try:
                parsed = date(int(year), int(month), int(day))
            except ValueError:
                parsed = None
            if parsed:
                return f"{parsed.isoformat()}T00:00:00.000Z"

    current = now or datetime.now(timezone.utc)
    if current.tzinfo is not None:
        current = current.astimezone(timezone.utc)
    return current.strftime('%Y-%m-%dT%H:%M:%S.') + f"{current.microsecond // 1000:03d}Z"


def date_in_range(value: str, start: str, end: str, now: Optional[datetime] = None) -> bool:
    """True when a document date falls inside [start, end], bounds included.

    Empty or unreadable dates count as today, so a sprint without an end
    date runs from its start until now.
    """
    target = parse_date_string(value, now)
    return parse_date_string(start, now) <= target <= parse_date_string(end, now)
