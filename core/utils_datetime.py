"""
DateTime utilities for resolving request date/time strings.
Parses ISO-8601-like values and converts them into a session timezone.
"""
from datetime import datetime, tzinfo
from typing import Any, Optional
import re

import pytz


# "2024-01-01 09:00", "2024-01-01T09:00:00", "2024-01-01T09:00:00.123+02:00", "2024-01-01T09:00Z", "2024-01-01"
REQUEST_DATETIME_PATTERN = re.compile(
    r'^(?P<date>\d{4}-\d{2}-\d{2})'
    r'(?:[T ](?P<time>\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?))?'
    r'\s*(?P<offset>Z|[+-]\d{2}:?\d{2})?$',
    re.IGNORECASE
)


def get_timezone(name: str) -> tzinfo:
    """
    Look up a timezone by IANA name.

    Raises:
        pytz.UnknownTimeZoneError: if the name is not a known zone
    """
    return pytz.timezone(name)


def is_known_timezone(name: Any) -> bool:
    """Check whether a value names a known IANA timezone."""
    return isinstance(name, str) and name in pytz.all_timezones_set


def _normalize_offset(offset: str) -> str:
    if offset.upper() == 'Z':
        return '+00:00'
    if ':' not in offset:
        return f"{offset[:3]}:{offset[3:]}"
    return offset


def parse_request_datetime(value: Any, tz: tzinfo) -> Optional[datetime]:
    """
    Parse a request date/time string into an aware datetime in ``tz``.

    A declared offset (``Z`` or ``+HH:MM``) is honored and the instant is
    converted to ``tz``. A value without an offset is taken to be local
    time in ``tz``. A date without a time resolves to midnight.

    Args:
        value: Raw request value
        tz: Target timezone (pytz zone)

    Returns:
        Aware datetime in ``tz``, or None if the value is absent or unparseable
    """
    if not isinstance(value, str):
        return None

    text = value.strip()
    match = REQUEST_DATETIME_PATTERN.match(text)
    if not match:
        return None

    iso = match.group('date')
    time = match.group('time')
    if time:
        if '.' in time:
            # fromisoformat only accepts 3 or 6 fraction digits before 3.11
            whole, fraction = time.split('.')
            time = f"{whole}.{fraction.ljust(6, '0')}"
        iso = f"{iso}T{time}"
    if match.group('offset'):
        iso = f"{iso}{_normalize_offset(match.group('offset'))}"

    try:
        parsed = datetime.fromisoformat(iso)
    except ValueError:
        # Out-of-range components such as month 13
        return None

    return to_timezone(parsed, tz)


def to_timezone(dt: datetime, tz: tzinfo) -> datetime:
    """Convert a datetime to ``tz``, localizing naive values in that zone."""
    if dt.tzinfo is None:
        if hasattr(tz, 'localize'):
            return tz.localize(dt)
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)
