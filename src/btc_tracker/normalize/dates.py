"""Purchase date parsing and formatting.

Dates are typed as DD/MM/YYYY, stored as YYYY-MM-DD, and shown either as
DD/MM/YY in tables or "Dec 25, 2023" on cards. Parsing returns None for
anything that is not a real, non-future calendar date; callers re-prompt
the user instead of substituting a default.
"""

import re
from datetime import date, datetime

MIN_YEAR = 1900
MAX_MASK_DIGITS = 8  # DDMMYYYY

_INPUT_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$", re.ASCII)
_NON_DIGIT = re.compile(r"\D", re.ASCII)
_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def parse_input_date(
    text: str | None,
    today: date | None = None,
    min_year: int = MIN_YEAR,
) -> date | None:
    """Parse a DD/MM/YYYY string into a date.

    Rejects month outside 1-12, day outside 1-31, days that do not exist in
    the given month (Feb 30, Apr 31, Feb 29 outside leap years), years
    before min_year or after the current year, and any date later than
    today. Today itself is accepted.

    Args:
        text: Text as typed, surrounding whitespace allowed.
        today: Reference calendar day; defaults to date.today().
        min_year: Earliest accepted year.

    Returns:
        The parsed date, or None if the text is not an acceptable date.
    """
    if not text:
        return None
    match = _INPUT_DATE.match(text.strip())
    if match is None:
        return None

    day, month, year = (int(group) for group in match.groups())
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None

    today = today or date.today()
    if year < min_year or year > today.year:
        return None

    try:
        parsed = date(year, month, day)
    except ValueError:
        return None

    if parsed > today:
        return None
    return parsed


def parse_storage_date(text: str) -> date:
    """Parse a stored YYYY-MM-DD date. Raises ValueError on malformed data."""
    return date.fromisoformat(text.strip())


def to_input_format(value: date | datetime) -> str:
    """Format a date as DD/MM/YYYY for the entry form."""
    value = _as_date(value)
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def to_storage_format(value: date | datetime) -> str:
    """Format a date as YYYY-MM-DD for storage."""
    return _as_date(value).isoformat()


def format_date_short(value: date | datetime) -> str:
    """DD/MM/YY, used in the purchase table."""
    value = _as_date(value)
    return f"{value.day:02d}/{value.month:02d}/{value.year % 100:02d}"


def format_date(value: date | datetime) -> str:
    """Readable date such as "Dec 25, 2023"."""
    value = _as_date(value)
    return f"{_MONTH_ABBR[value.month - 1]} {value.day}, {value.year}"


def mask_date_input(text: str | None) -> str:
    """Insert slashes as digits are typed: "2512" -> "25/12".

    Non-digits are dropped and at most eight digits are kept, so the
    result is always a prefix of a DD/MM/YYYY candidate.
    """
    digits = _NON_DIGIT.sub("", text or "")[:MAX_MASK_DIGITS]
    parts = (digits[:2], digits[2:4], digits[4:])
    return "/".join(part for part in parts if part)
