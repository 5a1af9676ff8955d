"""Shared test fixtures for the Bitcoin purchase tracker."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from btc_tracker.config import AppSettings, DateSettings, DisplaySettings, PriceSettings
from btc_tracker.models import PurchaseRecord, UserSettings


def _make_purchase(
    purchase_id: str,
    btc_amount: str,
    usd_spent: str,
    purchase_date: date = date(2023, 12, 25),
) -> PurchaseRecord:
    """Build a PurchaseRecord; the unit price is derived from amount and cost."""
    amount = Decimal(btc_amount)
    spent = Decimal(usd_spent)
    return PurchaseRecord(
        id=purchase_id,
        purchase_date=purchase_date,
        btc_price_at_purchase=spent / amount,
        btc_amount=amount,
        usd_spent=spent,
    )


@pytest.fixture
def ledger() -> list[PurchaseRecord]:
    """Two purchases totalling 0.5 BTC for $20,000."""
    return [
        _make_purchase("p1", "0.2", "6000", date(2023, 1, 10)),
        _make_purchase("p2", "0.3", "14000", date(2023, 12, 25)),
    ]


@pytest.fixture
def manual_settings() -> UserSettings:
    """Interest tracking on, wallet reports 0.55 BTC."""
    return UserSettings(
        interest_enabled=True,
        annual_interest_rate=Decimal("5"),
        manual_btc_balance=Decimal("0.55"),
        manual_balance_updated_at=datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test defaults."""
    return AppSettings(
        log_level="DEBUG",
        price=PriceSettings(exchange_id="kraken", symbol="BTC/USD"),
        display=DisplaySettings(),
        dates=DateSettings(),
    )
