"""Display formatting for dashboard figures.

USD is always shown with exactly 2 decimals, BTC with exactly 8, and
percentages with an explicit sign and 2 decimals. Missing or non-finite
values render as zero rather than "NaN".
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from btc_tracker.models import DashboardMetrics, UserSettings, to_decimal
from btc_tracker.normalize.dates import format_date

_CENT = Decimal("0.01")
_SATOSHI = Decimal("0.00000001")

Tone = Literal["neutral", "positive", "negative"]


def _finite(value: Decimal | float | int | None) -> Decimal:
    if value is None:
        return Decimal("0")
    number = to_decimal(value)
    return number if number.is_finite() else Decimal("0")


def format_usd(amount: Decimal | float | int | None) -> str:
    """Format as USD currency: "$1,234.56", "-$1,234.56"."""
    value = _finite(amount).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_btc(amount: Decimal | float | int | None) -> str:
    """Format as a BTC amount with 8 decimals: "0.50000000 BTC"."""
    value = _finite(amount).quantize(_SATOSHI, rounding=ROUND_HALF_UP)
    if value.is_zero():
        value = abs(value)
    return f"{value:.8f} BTC"


def format_percentage(value: Decimal | float | int | None) -> str:
    """Format a percentage with explicit sign: "+25.00%", "-3.10%", "+0.00%"."""
    rounded = _finite(value).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else "+"
    return f"{sign}{abs(rounded):.2f}%"


def _tone(value: Decimal | None) -> Tone:
    value = _finite(value)
    if value > 0:
        return "positive"
    if value < 0:
        return "negative"
    return "neutral"


@dataclass(frozen=True)
class MetricCard:
    """One rendered dashboard figure."""

    title: str
    value: str
    subtitle: str | None = None
    tone: Tone = "neutral"


def show_interest(metrics: DashboardMetrics, settings: UserSettings | None) -> bool:
    """Interest figures are surfaced only when enabled and a manual balance exists."""
    return (
        settings is not None
        and settings.interest_enabled
        and metrics.manual_total_bitcoin is not None
    )


def build_dashboard_view(
    metrics: DashboardMetrics,
    settings: UserSettings | None,
    fetched_at: datetime | None = None,
    change_24h_pct: Decimal | None = None,
) -> list[MetricCard]:
    """Render metrics into the ordered list of dashboard cards.

    Args:
        metrics: Output of compute_metrics().
        settings: User settings; interest cards depend on interest_enabled.
        fetched_at: When the live price was fetched, shown under the price.
        change_24h_pct: 24h price change in percent, shown as a signed badge
            and used as the price card tone.
    """
    interest = show_interest(metrics, settings)

    price_notes = []
    if change_24h_pct is not None:
        price_notes.append(f"24h {format_percentage(change_24h_pct)}")
    if fetched_at:
        price_notes.append(f"Fetched {format_date(fetched_at)}")

    cards = [
        MetricCard(
            "Current BTC Price",
            format_usd(metrics.current_btc_price),
            subtitle=" | ".join(price_notes) or None,
            tone=_tone(change_24h_pct),
        ),
        MetricCard(
            "Total Investment",
            format_usd(metrics.total_investment),
            subtitle="Total USD spent",
        ),
        MetricCard("Total Bought Bitcoin", format_btc(metrics.total_bought_bitcoin)),
    ]

    if metrics.manual_total_bitcoin is not None:
        updated_at = metrics.manual_balance_updated_at
        cards.append(
            MetricCard(
                "Real Total Bitcoin",
                format_btc(metrics.manual_total_bitcoin),
                subtitle=f"Updated {format_date(updated_at)}" if updated_at else None,
            )
        )

    if interest:
        cards.append(
            MetricCard(
                "Interest in BTC",
                format_btc(metrics.interest_in_btc),
                tone="positive" if _finite(metrics.interest_in_btc) > 0 else "neutral",
            )
        )
        cards.append(
            MetricCard(
                "Interest in USD",
                format_usd(metrics.interest_in_usd),
                tone="positive" if _finite(metrics.interest_in_usd) > 0 else "neutral",
            )
        )

    cards.append(
        MetricCard(
            "Final Value (without interest)" if interest else "Final Value",
            format_usd(metrics.final_value_purchased),
        )
    )
    if interest:
        cards.append(
            MetricCard("Final Value (with interest)", format_usd(metrics.final_value_real))
        )

    cards.append(
        MetricCard(
            "Profit (without interest)" if interest else "Profit/Loss",
            format_usd(metrics.profit_purchased),
            subtitle=f"ROI: {format_percentage(metrics.roi_purchased)}",
            tone=_tone(metrics.profit_purchased),
        )
    )
    if interest:
        cards.append(
            MetricCard(
                "Profit (with interest)",
                format_usd(metrics.profit_real),
                subtitle=f"ROI: {format_percentage(metrics.roi_real)}",
                tone=_tone(metrics.profit_real),
            )
        )

    cards.append(MetricCard("Equilibrium Price", format_usd(metrics.equilibrium_price)))
    return cards
