"""Market data layer -- live and historical BTC/USD prices."""

from btc_tracker.market_data.price_service import PriceService
from btc_tracker.market_data.price_source import CcxtPriceSource, PriceSource

__all__ = ["CcxtPriceSource", "PriceService", "PriceSource"]
