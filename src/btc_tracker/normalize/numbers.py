"""Locale-tolerant normalization of user-typed numbers.

Users type prices and amounts in whichever convention they grew up with:
"1,234.56" (period decimal, comma grouping) or "1.234,56" (comma decimal,
period grouping), with or without grouping, often half-finished. This
module turns that text into a canonical decimal string (optional leading
minus, digits, at most one period, no grouping) and formats canonical
values back into a grouped display string.

Nothing here raises. Malformed input is salvaged into the closest
canonical-looking string and left for parse_to_number() to reject.
"""

import re
from decimal import Decimal, InvalidOperation

_WHITESPACE = re.compile(r"\s+")
_CANONICAL = re.compile(r"^-?\d*\.?\d*$", re.ASCII)
_DIGITS = re.compile(r"^\d+$", re.ASCII)
# "1,234" or "-12,345": one thousands group after a short leading run. Read as
# US grouping so that grouped display output re-normalizes to the same value.
_SINGLE_US_GROUP = re.compile(r"^-?[1-9]\d{0,2},\d{3}$", re.ASCII)
# Digits after the last comma, optionally followed by a period and more
# digits: the comma is a US thousands separator ("1,234.56", "1,234.").
_US_GROUP_TAIL = re.compile(r"^\d+(\.\d*)?$", re.ASCII)
_NON_NUMERIC = re.compile(r"[^\d.,]", re.ASCII)
_GROUP_BOUNDARY = re.compile(r"\B(?=(\d{3})+(?!\d))", re.ASCII)


def _comma_is_decimal(text: str) -> bool:
    """True when the only comma in text is followed by digits and nothing else."""
    if text.count(",") != 1 or _SINGLE_US_GROUP.match(text):
        return False
    return bool(_DIGITS.match(text[text.rfind(",") + 1 :]))


def _salvage(text: str) -> str:
    """Best-effort cleanup for text that still is not canonical.

    Keeps digits and a leading minus, folds the first comma into a period,
    and merges any further periods into the fractional part of the first.
    """
    negative = text.startswith("-")
    kept = _NON_NUMERIC.sub("", text).replace(",", ".", 1).replace(",", "")
    head, point, tail = kept.partition(".")
    result = head + point + tail.replace(".", "")
    return f"-{result}" if negative else result


def normalize(raw: str | None) -> str:
    """Convert user-typed number text into a canonical decimal string.

    Examples:
        "1,234.56" -> "1234.56"
        "1.234,56" -> "1234.56"
        "1 234,56" -> "1234.56"
        "1234"     -> "1234"
        ","        -> "."  (user is mid-typing a decimal point)

    Args:
        raw: The text exactly as typed.

    Returns:
        Canonical decimal string, or "" for empty input.
    """
    if not raw:
        return ""

    text = _WHITESPACE.sub("", raw)
    if not text:
        return ""
    if text in (".", ","):
        return "."

    if "," not in text:
        # US convention: any period is the decimal point
        normalized = text
    elif _comma_is_decimal(text):
        # European convention: periods group thousands, the comma is decimal
        integer, fraction = text.rsplit(",", 1)
        normalized = f"{integer.replace('.', '')}.{fraction}"
    elif _US_GROUP_TAIL.match(text[text.rfind(",") + 1 :]):
        normalized = text.replace(",", "")
    else:
        # Comma followed by noise or nothing is not trusted as a decimal mark
        normalized = text.replace(".", "").replace(",", "")

    if not _CANONICAL.match(normalized):
        normalized = _salvage(normalized)
    return normalized


def parse_to_number(raw: str | None) -> Decimal:
    """Parse user-typed text into a Decimal.

    Returns Decimal("NaN") for empty or unparseable input. Callers must
    treat NaN as a rejected value, never as zero.
    """
    try:
        return Decimal(normalize(raw))
    except InvalidOperation:
        return Decimal("NaN")


def detect_european_format(raw: str | None) -> bool:
    """Return True if raw text reads as comma-decimal (European) input.

    A single comma with no period after it, followed by digits or by
    nothing yet (the user just typed the separator), marks the comma as
    the decimal point.
    """
    if not raw:
        return False
    text = _WHITESPACE.sub("", raw)
    comma_index = text.rfind(",")
    if comma_index == -1 or text.count(",") != 1:
        return False
    if _SINGLE_US_GROUP.match(text):
        return False
    if text.rfind(".") > comma_index:
        return False
    after = text[comma_index + 1 :]
    return after == "" or after[0] in "0123456789"


def _typing_separator(raw: str | None, decimal_mark: str) -> bool:
    if not raw:
        return False
    return _WHITESPACE.sub("", raw).endswith(decimal_mark)


def format_for_display(
    value: str,
    original: str | None = None,
    max_decimals: int = 8,
) -> str:
    """Format a canonical decimal string with thousands grouping.

    The grouping convention is taken from the original typed text, not the
    canonical value, so a half-typed "1234," keeps its European look. Only
    the integer part is grouped; the fraction is truncated (not rounded) to
    max_decimals digits. A trailing separator the user is still typing is
    kept, so "1234." displays as "1,234." rather than "1,234".

    Args:
        value: Canonical decimal string as returned by normalize().
        original: The raw text the value came from, used as locale hint.
        max_decimals: Maximum fractional digits to show.

    Returns:
        Display string, or value unchanged if it is not a number yet.
    """
    if not value or value in (".", ","):
        return value
    if parse_to_number(value).is_nan():
        return value

    european = detect_european_format(original)
    thousands, decimal_mark = (".", ",") if european else (",", ".")

    integer_part, _, fraction = value.partition(".")
    sign = "-" if integer_part.startswith("-") else ""
    digits = integer_part.lstrip("-").lstrip("0") or "0"
    grouped = sign + _GROUP_BOUNDARY.sub(thousands, digits)

    fraction = fraction[: max(max_decimals, 0)]
    if fraction:
        return f"{grouped}{decimal_mark}{fraction}"
    if value.endswith(".") or _typing_separator(original, decimal_mark):
        return f"{grouped}{decimal_mark}"
    return grouped


def format_usd_input(
    value: str,
    original: str | None = None,
    max_decimals: int = 2,
) -> str:
    """Echo a typed USD amount back as "$1,234.56" (or "-$1,234.56")."""
    if not value or value in (".", ","):
        return value
    normalized = normalize(value)
    if parse_to_number(normalized).is_nan():
        return value

    formatted = format_for_display(normalized, original or value, max_decimals)
    if formatted.startswith("-"):
        return f"-${formatted[1:]}"
    return f"${formatted}"


def format_btc_input(
    value: str,
    original: str | None = None,
    max_decimals: int = 8,
) -> str:
    """Echo a typed BTC amount back with grouping and up to 8 decimals."""
    if not value or value in (".", ","):
        return value
    return format_for_display(normalize(value), original or value, max_decimals)
