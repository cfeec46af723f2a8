"""Date utilities for runway.

Pure functions for period ranges, month arithmetic and tolerant date parsing.
"""

import math
import re
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

from runway.domain.models import PeriodType

_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_iso_date(value: str | date | None) -> date | None:
    """Parse an ISO date without raising.

    Args:
        value: Date string (YYYY-MM-DD), date object, or None.

    Returns:
        Parsed date, or None if the value is missing, blank or malformed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def parse_strict_date(value: str) -> date | None:
    """Parse a user-supplied date that must be exactly YYYY-MM-DD.

    Args:
        value: Date string as entered.

    Returns:
        Parsed date, or None unless the whole string is a valid ISO date.
    """
    text = value.strip()
    if not _ISO_DATE_RE.fullmatch(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def add_months(start: date, months: int) -> date:
    """Shift a date by whole calendar months, clamping the day to month end."""
    return start + relativedelta(months=months)


def period_offset(start: date, period_type: PeriodType, count: int) -> date:
    """Return the start of the period `count` periods after `start`."""
    if period_type == "weekly":
        return start + timedelta(weeks=count)
    if period_type == "monthly":
        return start + relativedelta(months=count)
    return start + relativedelta(years=count)


def period_range(start: date, period_type: PeriodType, index: int) -> tuple[date, date, str]:
    """Calculate date range and label for the index-th projection period.

    Args:
        start: First day of the first period.
        period_type: "weekly", "monthly" or "yearly".
        index: Zero-based period index.

    Returns:
        Tuple of (period_start, period_end, label) where:
        - period_start: First day of the period (inclusive)
        - period_end: First day of the next period (exclusive)
        - label: Human-readable label (e.g., "Week of Jan 5, 2026", "January 2026", "2026")
    """
    period_start = period_offset(start, period_type, index)
    period_end = period_offset(start, period_type, index + 1)

    if period_type == "weekly":
        label = f"Week of {period_start.strftime('%b')} {period_start.day}, {period_start.year}"
    elif period_type == "monthly":
        label = period_start.strftime("%B %Y")
    else:
        label = period_start.strftime("%Y")

    return period_start, period_end, label


def months_between(start: date, end: date) -> int:
    """Whole months available between two dates, at least 1.

    Uses an average month length of 30.44 days and rounds up.
    """
    days = (end - start).days
    return max(1, math.ceil(days / 30.44))
