"""Settings entry workflow: annual interest rate and manual BTC balance."""

from datetime import datetime, timezone
from decimal import Decimal

from btc_tracker.exceptions import InvalidSettingsError
from btc_tracker.logging import get_logger
from btc_tracker.models import SettingsUpdate
from btc_tracker.normalize.numbers import parse_to_number

logger = get_logger(__name__)


def _non_negative(field: str, text: str, missing: str, invalid: str) -> Decimal:
    if not text or not text.strip():
        raise InvalidSettingsError({field: missing})
    value = parse_to_number(text)
    if not value.is_finite() or value < 0:
        logger.info("settings_input_rejected", field=field)
        raise InvalidSettingsError({field: invalid})
    return value


def validate_interest_rate(text: str) -> SettingsUpdate:
    """Validate the annual interest rate field (percent per year, >= 0)."""
    rate = _non_negative(
        "annual_interest_rate",
        text,
        "Please enter an interest rate",
        "Please enter a valid interest rate",
    )
    return SettingsUpdate(annual_interest_rate=rate)


def validate_manual_balance(text: str, now: datetime | None = None) -> SettingsUpdate:
    """Validate the manual BTC balance field and stamp the update time."""
    balance = _non_negative(
        "manual_btc_balance",
        text,
        "Please enter your current Bitcoin balance",
        "Please enter a valid Bitcoin amount",
    )
    return SettingsUpdate(
        manual_btc_balance=balance,
        manual_balance_updated_at=now or datetime.now(timezone.utc),
    )
