"""Tests for dashboard display formatting and card selection."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from btc_tracker.models import PurchaseRecord, UserSettings
from btc_tracker.portfolio.formatting import (
    MetricCard,
    build_dashboard_view,
    format_btc,
    format_percentage,
    format_usd,
    show_interest,
)
from btc_tracker.portfolio.metrics import compute_metrics


class TestFormatUsd:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (Decimal("1234.56"), "$1,234.56"),
            (Decimal("1234567.891"), "$1,234,567.89"),
            (Decimal("0.005"), "$0.01"),
            (Decimal("-5000"), "-$5,000.00"),
            (Decimal("-0.001"), "$0.00"),
            (0, "$0.00"),
            (2500.5, "$2,500.50"),
            (None, "$0.00"),
            (Decimal("NaN"), "$0.00"),
        ],
    )
    def test_format(self, amount: Decimal | float | int | None, expected: str) -> None:
        assert format_usd(amount) == expected


class TestFormatBtc:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (Decimal("0.5"), "0.50000000 BTC"),
            (Decimal("0.123456789"), "0.12345679 BTC"),
            (Decimal("-0.05"), "-0.05000000 BTC"),
            (Decimal("21"), "21.00000000 BTC"),
            (None, "0.00000000 BTC"),
            (Decimal("-0.000000001"), "0.00000000 BTC"),
        ],
    )
    def test_format(self, amount: Decimal | None, expected: str) -> None:
        assert format_btc(amount) == expected


class TestFormatPercentage:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (Decimal("25"), "+25.00%"),
            (Decimal("37.5"), "+37.50%"),
            (Decimal("-3.104"), "-3.10%"),
            (Decimal("0"), "+0.00%"),
            (Decimal("-0.001"), "+0.00%"),
            (None, "+0.00%"),
            (Decimal("NaN"), "+0.00%"),
            (float("nan"), "+0.00%"),
        ],
    )
    def test_format(self, value: Decimal | float | None, expected: str) -> None:
        assert format_percentage(value) == expected


def _titles(cards: list[MetricCard]) -> list[str]:
    return [card.title for card in cards]


class TestBuildDashboardView:
    """Which cards appear depends on interest_enabled and the manual balance."""

    def test_without_settings(self, ledger: list[PurchaseRecord]) -> None:
        metrics = compute_metrics(ledger, None, Decimal("50000"))
        cards = build_dashboard_view(metrics, None)
        assert _titles(cards) == [
            "Current BTC Price",
            "Total Investment",
            "Total Bought Bitcoin",
            "Final Value",
            "Profit/Loss",
            "Equilibrium Price",
        ]

    def test_values_rendered(self, ledger: list[PurchaseRecord]) -> None:
        metrics = compute_metrics(ledger, None, Decimal("50000"))
        cards = {card.title: card for card in build_dashboard_view(metrics, None)}
        assert cards["Current BTC Price"].value == "$50,000.00"
        assert cards["Total Bought Bitcoin"].value == "0.50000000 BTC"
        assert cards["Profit/Loss"].value == "$5,000.00"
        assert cards["Profit/Loss"].subtitle == "ROI: +25.00%"
        assert cards["Profit/Loss"].tone == "positive"
        assert cards["Equilibrium Price"].value == "$40,000.00"

    def test_interest_cards_when_enabled(
        self, ledger: list[PurchaseRecord], manual_settings: UserSettings
    ) -> None:
        metrics = compute_metrics(ledger, manual_settings, Decimal("50000"))
        cards = {card.title: card for card in build_dashboard_view(metrics, manual_settings)}
        assert cards["Real Total Bitcoin"].value == "0.55000000 BTC"
        assert cards["Real Total Bitcoin"].subtitle == "Updated Mar 1, 2024"
        assert cards["Interest in BTC"].value == "0.05000000 BTC"
        assert cards["Interest in USD"].value == "$2,500.00"
        assert cards["Final Value (with interest)"].value == "$27,500.00"
        assert cards["Profit (with interest)"].subtitle == "ROI: +37.50%"
        assert cards["Profit (without interest)"].subtitle == "ROI: +25.00%"

    def test_manual_balance_shown_but_interest_hidden_when_disabled(
        self, ledger: list[PurchaseRecord], manual_settings: UserSettings
    ) -> None:
        manual_settings.interest_enabled = False
        metrics = compute_metrics(ledger, manual_settings, Decimal("50000"))
        titles = _titles(build_dashboard_view(metrics, manual_settings))
        assert "Real Total Bitcoin" in titles
        assert "Interest in BTC" not in titles
        assert "Final Value" in titles

    def test_enabled_without_manual_balance_hides_interest(
        self, ledger: list[PurchaseRecord]
    ) -> None:
        settings = UserSettings(interest_enabled=True)
        metrics = compute_metrics(ledger, settings, Decimal("50000"))
        assert show_interest(metrics, settings) is False
        assert "Interest in USD" not in _titles(build_dashboard_view(metrics, settings))

    def test_loss_tone(self, ledger: list[PurchaseRecord]) -> None:
        metrics = compute_metrics(ledger, None, Decimal("30000"))
        cards = {card.title: card for card in build_dashboard_view(metrics, None)}
        assert cards["Profit/Loss"].value == "-$5,000.00"
        assert cards["Profit/Loss"].tone == "negative"
        assert cards["Profit/Loss"].subtitle == "ROI: -25.00%"

    def test_fetched_at_subtitle(self, ledger: list[PurchaseRecord]) -> None:
        metrics = compute_metrics(ledger, None, Decimal("50000"))
        fetched_at = datetime(2024, 6, 15, 9, 30, tzinfo=timezone.utc)
        cards = build_dashboard_view(metrics, None, fetched_at=fetched_at)
        assert cards[0].subtitle == "Fetched Jun 15, 2024"

    def test_change_24h_badge(self, ledger: list[PurchaseRecord]) -> None:
        metrics = compute_metrics(ledger, None, Decimal("50000"))
        fetched_at = datetime(2024, 6, 15, 9, 30, tzinfo=timezone.utc)
        cards = build_dashboard_view(
            metrics, None, fetched_at=fetched_at, change_24h_pct=Decimal("-1.25")
        )
        assert cards[0].subtitle == "24h -1.25% | Fetched Jun 15, 2024"
        assert cards[0].tone == "negative"

    def test_price_card_without_change_or_time(self, ledger: list[PurchaseRecord]) -> None:
        metrics = compute_metrics(ledger, None, Decimal("50000"))
        cards = build_dashboard_view(metrics, None)
        assert cards[0].subtitle is None
        assert cards[0].tone == "neutral"

    @pytest.mark.parametrize("price", [Decimal("NaN"), float("inf")])
    def test_non_finite_price_renders_as_zero(
        self,
        ledger: list[PurchaseRecord],
        manual_settings: UserSettings,
        price: Decimal | float,
    ) -> None:
        metrics = compute_metrics(ledger, manual_settings, price)
        cards = {card.title: card for card in build_dashboard_view(metrics, manual_settings)}
        assert cards["Current BTC Price"].value == "$0.00"
        assert cards["Profit (with interest)"].value == "$0.00"
        assert cards["Profit (with interest)"].tone == "neutral"
        assert cards["Interest in USD"].tone == "neutral"
        assert cards["Interest in BTC"].tone == "positive"
        assert cards["Equilibrium Price"].value == "$40,000.00"
