"""
Timezone and date utilities.

Provides "today" in the configured timezone, used for future-date checks.
"""

from datetime import date, datetime

import pytz


def current_date(timezone_str: str = "Asia/Singapore") -> date:
    """
    Get the current calendar date in a timezone.

    Args:
        timezone_str: Timezone string (e.g., "Asia/Singapore").

    Returns:
        Today's date as seen in that timezone.
    """
    tz = pytz.timezone(timezone_str)
    return datetime.now(tz).date()


def days_between(start: date, end: date) -> int:
    """Number of days from start to end (negative if end precedes start)."""
    return (end - start).days
