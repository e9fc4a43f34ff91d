"""
UTC datetime utilities for consistent timezone handling.

Record timestamps are normalized to timezone-aware UTC when records are
built, so scoring and sorting never compare naive and aware values.
"""

from datetime import UTC, datetime

# Sort key for records without a timestamp: older than anything real.
EPOCH_MIN = datetime.min.replace(tzinfo=UTC)


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def whole_days_between(earlier: datetime, later: datetime) -> int:
    """
    Return the number of whole days from earlier to later (floored).

    Negative when earlier is in the future relative to later.
    """
    delta = ensure_utc(later) - ensure_utc(earlier)
    return delta.days


def month_label(dt: datetime) -> str:
    """Format a datetime as 'Month YYYY' (e.g. 'March 2026') for date facets."""
    return dt.strftime("%B %Y")
