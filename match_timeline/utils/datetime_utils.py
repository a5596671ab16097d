"""Datetime helpers.

All datetimes produced by this package are timezone-aware UTC.
"""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Get the current time in UTC, timezone-aware."""
    return datetime.now(timezone.utc)
