"""
Dates -- calendar-month arithmetic for billing periods.

Responsibility:
    Date-only helpers shared by the billing engines: lenient coercion of
    datastore values into ``date``, calendar month bounds, inclusive day
    counts and month keys/labels.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Failure modes:
    - ``coerce_date`` never raises; unusable input yields ``None``.
    - ``parse_iso_date`` raises ``ValueError`` on a malformed string.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime

from dateutil.relativedelta import relativedelta

DATE_FMT = "%Y-%m-%d"
MONTH_KEY_FMT = "%Y-%m"


def parse_iso_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` (a trailing time part is ignored)."""
    return datetime.strptime(value.strip()[:10], DATE_FMT).date()


def format_iso_date(value: date) -> str:
    """Format a date as ``YYYY-MM-DD`` for the datastore."""
    return value.strftime(DATE_FMT)


def coerce_date(value: object) -> date | None:
    """
    Convert a datastore value into a ``date``.

    Accepts ``date``, ``datetime`` (truncated) and ISO strings.  Returns
    ``None`` for ``None``, empty strings, unparseable strings and any other
    type.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            return None
    return None


def month_start(value: date) -> date:
    """First day of the calendar month containing ``value``."""
    return value + relativedelta(day=1)


def month_end(value: date) -> date:
    """Last day of the calendar month containing ``value``."""
    return value + relativedelta(day=31)


def next_month_start(value: date) -> date:
    """First day of the calendar month after the one containing ``value``."""
    return month_start(value) + relativedelta(months=1)


def same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month


def inclusive_days(start: date, end: date) -> int:
    """Days from ``start`` to ``end`` counting both endpoints."""
    return (end - start).days + 1


def is_full_calendar_month(start: date, end: date) -> bool:
    """True iff ``[start, end]`` is exactly the 1st..last day of one month."""
    return start.day == 1 and end == month_end(end) and same_month(start, end)


def month_key(value: date) -> str:
    return value.strftime(MONTH_KEY_FMT)


def month_label(value: date) -> str:
    """Human-readable ``January 2026`` style label."""
    return f"{calendar.month_name[value.month]} {value.year}"


def short_day_label(value: date, with_year: bool = False) -> str:
    """``15 Jan`` or ``15 Jan 2026``."""
    label = f"{value.day:02d} {calendar.month_abbr[value.month]}"
    if with_year:
        label = f"{label} {value.year}"
    return label
