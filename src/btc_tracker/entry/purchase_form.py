"""Purchase entry workflow: raw form text to a validated PurchaseDraft.

The form collects four free-text fields. Numbers go through the locale
tolerant normalizer, the date through the DD/MM/YYYY parser; every
failing field is reported at once so the user can fix them together.
"""

from datetime import date

from btc_tracker.config import DateSettings, DisplaySettings
from btc_tracker.exceptions import InvalidPurchaseError
from btc_tracker.logging import get_logger
from btc_tracker.models import PurchaseDraft
from btc_tracker.normalize.dates import (
    mask_date_input,
    parse_input_date,
    to_input_format,
    to_storage_format,
)
from btc_tracker.normalize.numbers import (
    format_btc_input,
    format_usd_input,
    parse_to_number,
)

logger = get_logger(__name__)

# field -> (required message, invalid message)
_NUMBER_FIELDS = {
    "btc_price_at_purchase": (
        "Bitcoin price is required",
        "Please enter a valid Bitcoin price",
    ),
    "btc_amount": (
        "Bitcoin amount is required",
        "Please enter a valid Bitcoin amount",
    ),
    "usd_spent": (
        "USD spent is required",
        "Please enter a valid USD amount",
    ),
}


class PurchaseEntry:
    """Form helpers and validation for adding or editing a purchase.

    Args:
        date_settings: Purchase date constraints (earliest year).
        display_settings: Decimals used when echoing typed amounts.
    """

    def __init__(
        self,
        date_settings: DateSettings | None = None,
        display_settings: DisplaySettings | None = None,
    ) -> None:
        self._dates = date_settings or DateSettings()
        self._display = display_settings or DisplaySettings()

    def default_date(self, today: date | None = None) -> str:
        """Initial value of the date field: today as DD/MM/YYYY."""
        return to_input_format(today or date.today())

    def mask_date(self, text: str) -> str:
        return mask_date_input(text)

    def echo_usd(self, raw: str) -> str:
        """Display form of a typed USD value, e.g. "$1,234.56"."""
        return format_usd_input(raw, max_decimals=self._display.usd_input_decimals)

    def echo_btc(self, raw: str) -> str:
        """Display form of a typed BTC value, e.g. "0,00150000"."""
        return format_btc_input(raw, max_decimals=self._display.btc_input_decimals)

    def validate(
        self,
        date_text: str,
        price_text: str,
        amount_text: str,
        usd_text: str,
        today: date | None = None,
    ) -> PurchaseDraft:
        """Validate raw form values and return a draft ready for storage.

        Raises:
            InvalidPurchaseError: With a message for every failing field.
        """
        errors: dict[str, str] = {}

        purchase_date = None
        if not date_text or not date_text.strip():
            errors["purchase_date"] = "Date is required"
        else:
            purchase_date = parse_input_date(
                date_text, today=today, min_year=self._dates.min_year
            )
            if purchase_date is None:
                errors["purchase_date"] = (
                    "Please enter a valid date in DD/MM/YYYY format "
                    "(day: 1-31, month: 1-12, year: not in the future)"
                )

        raw_numbers = {
            "btc_price_at_purchase": price_text,
            "btc_amount": amount_text,
            "usd_spent": usd_text,
        }
        numbers = {}
        for name, raw in raw_numbers.items():
            required_message, invalid_message = _NUMBER_FIELDS[name]
            if not raw or not raw.strip():
                errors[name] = required_message
                continue
            value = parse_to_number(raw)
            if not value.is_finite() or value <= 0:
                errors[name] = invalid_message
                continue
            numbers[name] = value

        if errors:
            logger.info("purchase_input_rejected", fields=sorted(errors))
            raise InvalidPurchaseError(errors)

        return PurchaseDraft(
            purchase_date=to_storage_format(purchase_date),
            btc_price_at_purchase=numbers["btc_price_at_purchase"],
            btc_amount=numbers["btc_amount"],
            usd_spent=numbers["usd_spent"],
        )


def validate_purchase_input(
    date_text: str,
    price_text: str,
    amount_text: str,
    usd_text: str,
    today: date | None = None,
) -> PurchaseDraft:
    """Validate purchase form text with default settings."""
    return PurchaseEntry().validate(date_text, price_text, amount_text, usd_text, today=today)
