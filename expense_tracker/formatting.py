"""
Formatting helpers shared by the store, the summaries and the page.

Month keys are plain "YYYY-MM" strings. Because they are zero padded,
sorting them as strings also sorts them chronologically.
"""

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Union

DateLike = Union[date, str]

CENT = Decimal("0.01")

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def to_date(value: DateLike) -> date:
    """Accept a date or an ISO "YYYY-MM-DD" string. Raises ValueError otherwise."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO date string, got {type(value).__name__}")
    text = value.strip()
    if not _ISO_DATE.match(text):
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
    return date.fromisoformat(text)


def format_currency(n: Any, symbol: str = "$") -> str:
    """
    Render an amount as currency text, e.g. "$1,234.50" or "-$5.00".
    
    Never fails: anything that is not a finite number is shown as zero.
    """
    try:
        value = n if isinstance(n, Decimal) else Decimal(str(n))
    except (InvalidOperation, ValueError, TypeError):
        value = Decimal(0)
    if isinstance(n, bool) or not value.is_finite():
        value = Decimal(0)
    
    try:
        value = value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        value = Decimal(0)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def month_key(value: DateLike) -> str:
    """Return the "YYYY-MM" key for a date or ISO date string."""
    d = to_date(value)
    return f"{d.year:04d}-{d.month:02d}"


def start_of_month_iso(value: DateLike) -> str:
    """ISO date of the first day of the month containing `value`."""
    return to_date(value).replace(day=1).isoformat()


def month_key_to_date(key: str) -> date:
    """First day of the month named by a "YYYY-MM" key."""
    year, _, month = key.partition("-")
    return date(int(year), int(month), 1)


def month_label(key: str) -> str:
    """Human month name for a month key: "2026-10" -> "October 2026"."""
    return month_key_to_date(key).strftime("%B %Y")


def format_entry_date(value: DateLike) -> str:
    """Short human date for table rows: "19 Oct 2026"."""
    return to_date(value).strftime("%d %b %Y")
