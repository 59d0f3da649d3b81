"""
UTC-first datetime utilities for the Health Score Service.

All datetimes are stored and processed in UTC:
- Internal processing: timezone-aware datetimes in UTC
- Database storage: ISO 8601 strings with 'Z' suffix (SQLite TEXT columns)
- Day bucketing: calendar dates taken in UTC, never in server-local time

Usage:
    from core.datetime_utils import utc_now, utc_day, window_start

    now = utc_now()
    since = window_start(now, days=30)
    day = utc_day(record.timestamp)  # datetime.date
"""
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

logger = logging.getLogger(__name__)


# =============================================================================
# CORE UTILITIES
# =============================================================================

def utc_now() -> datetime:
    """Get current datetime in UTC with timezone info."""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    - If datetime is naive (no timezone), assumes it's already UTC
    - If datetime has timezone, converts to UTC

    Example:
        >>> ist = timezone(timedelta(hours=5, minutes=30))
        >>> to_utc(datetime(2024, 1, 15, 16, 0, tzinfo=ist)).hour
        10
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


# =============================================================================
# DAY BUCKETING
# =============================================================================

def utc_day(dt: datetime) -> date:
    """
    Calendar day of a datetime in UTC.

    A record at 2024-01-15T23:30:00-05:00 belongs to 2024-01-16.
    """
    return to_utc(dt).date()


def window_start(now: datetime, days: int) -> datetime:
    """
    Start of a trailing window of ``days`` days ending at ``now``.

    Raises:
        ValueError: If days is not positive.
    """
    if days <= 0:
        raise ValueError(f"Window must span at least one day, got {days}")
    return to_utc(now) - timedelta(days=days)


def days_between(later: date, earlier: date) -> int:
    """Whole calendar days from ``earlier`` to ``later`` (negative if reversed)."""
    return (later - earlier).days


# =============================================================================
# PARSING & FORMATTING
# =============================================================================

def parse_datetime(value: Union[str, datetime]) -> datetime:
    """
    Parse a datetime value to UTC datetime.

    Accepts a datetime object or an ISO 8601 string (with or without
    timezone, 'Z' suffix allowed). Date-only strings resolve to midnight UTC.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return to_utc(value)

    if not isinstance(value, str):
        raise ValueError(f"Expected datetime or string, got {type(value).__name__}")

    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"

    try:
        return to_utc(datetime.fromisoformat(value))
    except ValueError:
        pass

    try:
        return datetime.strptime(value, "%Y-%m-%d %H:%M:%S").replace(tzinfo=timezone.utc)
    except ValueError:
        raise ValueError(f"Cannot parse datetime: '{value}'")


def format_iso(dt: datetime) -> str:
    """
    Format datetime to ISO 8601 string with 'Z' suffix.

    Example:
        >>> format_iso(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc))
        '2024-01-15T10:30:00Z'
    """
    return to_utc(dt).strftime("%Y-%m-%dT%H:%M:%SZ")


def to_db_string(dt: datetime) -> str:
    """Convert datetime to the TEXT form stored in SQLite."""
    return format_iso(dt)


def from_db_string(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a datetime read back from SQLite.

    Returns None for NULL columns. Corrupt values are logged and skipped.
    """
    if value is None:
        return None
    try:
        return parse_datetime(value)
    except ValueError as e:
        logger.warning(f"Failed to parse stored datetime '{value}': {e}")
        return None
