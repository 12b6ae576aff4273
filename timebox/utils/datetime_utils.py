"""
Date and datetime utilities.
"""

from datetime import date, datetime, timezone
from typing import Optional

# UTC timezone constant
UTC = timezone.utc


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Replaces datetime.utcnow() which is deprecated in Python 3.12+.

    Returns:
        datetime: Current UTC time with tzinfo set to UTC
    """
    return datetime.now(UTC)


def parse_day(value: Optional[str]) -> date:
    """
    Parse a YYYY-MM-DD day, defaulting to today.

    Raises:
        ValueError: If value is not an ISO calendar date
    """
    if not value:
        return date.today()
    return date.fromisoformat(value)
