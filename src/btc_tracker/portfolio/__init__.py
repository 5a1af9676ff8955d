"""Portfolio metrics and their display formatting."""

from btc_tracker.portfolio.formatting import (
    MetricCard,
    build_dashboard_view,
    format_btc,
    format_percentage,
    format_usd,
)
from btc_tracker.portfolio.metrics import compute_metrics

__all__ = [
    "MetricCard",
    "build_dashboard_view",
    "compute_metrics",
    "format_btc",
    "format_percentage",
    "format_usd",
]
