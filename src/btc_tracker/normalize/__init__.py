"""Text normalization for user-typed numbers and dates."""

from btc_tracker.normalize.dates import (
    format_date,
    format_date_short,
    mask_date_input,
    parse_input_date,
    parse_storage_date,
    to_input_format,
    to_storage_format,
)
from btc_tracker.normalize.numbers import (
    detect_european_format,
    format_btc_input,
    format_for_display,
    format_usd_input,
    normalize,
    parse_to_number,
)

__all__ = [
    "detect_european_format",
    "format_btc_input",
    "format_date",
    "format_date_short",
    "format_for_display",
    "format_usd_input",
    "mask_date_input",
    "normalize",
    "parse_input_date",
    "parse_storage_date",
    "parse_to_number",
    "to_input_format",
    "to_storage_format",
]
