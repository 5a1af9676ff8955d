"""Dashboard loading: live quote + ledger + settings -> rendered metrics."""

from collections.abc import Sequence
from dataclasses import dataclass

from btc_tracker.logging import get_logger
from btc_tracker.market_data.price_service import PriceService
from btc_tracker.models import DashboardMetrics, PriceQuote, PurchaseRecord, UserSettings
from btc_tracker.portfolio.formatting import MetricCard, build_dashboard_view
from btc_tracker.portfolio.metrics import compute_metrics

logger = get_logger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the dashboard screen renders for one refresh."""

    quote: PriceQuote
    metrics: DashboardMetrics
    cards: list[MetricCard]


async def load_dashboard(
    purchases: Sequence[PurchaseRecord],
    settings: UserSettings | None,
    price_service: PriceService,
    force: bool = False,
) -> DashboardSnapshot:
    """Fetch (or reuse) the live price and compute the dashboard.

    Args:
        purchases: The user's ledger as returned by the store.
        settings: The user's settings, or None if not created yet.
        price_service: Rate-limited live price access.
        force: Bypass the price refresh cooldown.

    Raises:
        PriceUnavailableError: If no price could be fetched.
    """
    quote = await price_service.refresh(force=force)
    metrics = compute_metrics(purchases, settings, quote.price)
    cards = build_dashboard_view(
        metrics,
        settings,
        fetched_at=quote.fetched_at,
        change_24h_pct=quote.change_24h_pct,
    )
    logger.debug(
        "dashboard_loaded",
        purchase_count=len(purchases),
        has_manual_balance=metrics.manual_total_bitcoin is not None,
    )
    return DashboardSnapshot(quote=quote, metrics=metrics, cards=cards)
