"""Portfolio metrics over a purchase ledger.

Pure Decimal arithmetic: no I/O, no caching, no shared state. Every
division is guarded and saturates to zero, so an empty or fully refunded
ledger reports 0% ROI and a 0 break-even price instead of NaN/Infinity.

Two families of figures are produced:
  - "purchased": based only on the recorded purchases
  - "real": based on the user's manual wallet balance when one is set,
    otherwise identical to "purchased"
"""

from collections.abc import Iterable
from decimal import Decimal

from btc_tracker.models import DashboardMetrics, PurchaseRecord, UserSettings, to_decimal

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def _roi(profit: Decimal, investment: Decimal) -> Decimal:
    """Profit as a percentage of investment; 0 when nothing was invested."""
    if investment > _ZERO:
        return profit / investment * _HUNDRED
    return _ZERO


def compute_metrics(
    purchases: Iterable[PurchaseRecord],
    settings: UserSettings | None,
    current_price: Decimal | float | int,
) -> DashboardMetrics:
    """Compute dashboard metrics for a ledger at the given BTC price.

    Order of purchases does not matter. A missing settings record means no
    manual balance, in which case the "real" figures fall back to the
    purchase-based ones and interest is zero.

    Args:
        purchases: The user's purchase ledger (may be empty).
        settings: The user's settings, or None if none exist yet.
        current_price: Live USD price per BTC.

    Returns:
        DashboardMetrics with all derived figures at full precision.
    """
    price = to_decimal(current_price)
    if not price.is_finite():
        # NaN propagates quietly through Decimal arithmetic; Infinity would raise
        price = Decimal("NaN")

    total_investment = _ZERO
    total_bought_bitcoin = _ZERO
    for purchase in purchases:
        total_investment += purchase.usd_spent
        total_bought_bitcoin += purchase.btc_amount

    manual_total_bitcoin = settings.manual_btc_balance if settings is not None else None
    manual_balance_updated_at = (
        settings.manual_balance_updated_at if settings is not None else None
    )

    final_value_purchased = total_bought_bitcoin * price
    profit_purchased = final_value_purchased - total_investment

    if manual_total_bitcoin is not None:
        final_value_real = manual_total_bitcoin * price
        interest_in_btc = manual_total_bitcoin - total_bought_bitcoin
    else:
        final_value_real = final_value_purchased
        interest_in_btc = _ZERO
    profit_real = final_value_real - total_investment

    if total_bought_bitcoin > _ZERO:
        equilibrium_price = total_investment / total_bought_bitcoin
    else:
        equilibrium_price = _ZERO

    return DashboardMetrics(
        current_btc_price=price,
        total_investment=total_investment,
        total_bought_bitcoin=total_bought_bitcoin,
        manual_total_bitcoin=manual_total_bitcoin,
        manual_balance_updated_at=manual_balance_updated_at,
        final_value_purchased=final_value_purchased,
        final_value_real=final_value_real,
        profit_purchased=profit_purchased,
        profit_real=profit_real,
        roi_purchased=_roi(profit_purchased, total_investment),
        roi_real=_roi(profit_real, total_investment),
        interest_in_btc=interest_in_btc,
        interest_in_usd=interest_in_btc * price,
        equilibrium_price=equilibrium_price,
    )
