"""Cached access to the live BTC price with a refresh cooldown.

The price source is hit at most once per cooldown window; a forced refresh
(pull-to-refresh) bypasses the window. Only the quote is cached here; the
metrics calculator is always called with whatever price this returns.
"""

import asyncio
import time
from collections.abc import Callable
from datetime import date
from decimal import Decimal

from btc_tracker.logging import get_logger
from btc_tracker.market_data.price_source import PriceSource
from btc_tracker.models import PriceQuote

logger = get_logger(__name__)


class PriceService:
    """Rate-limited cache in front of a PriceSource.

    Args:
        source: Where prices come from.
        cooldown_seconds: Minimum time between live fetches.
        clock: Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        source: PriceSource,
        cooldown_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._cooldown = cooldown_seconds
        self._clock = clock
        self._quote: PriceQuote | None = None
        self._last_fetch: float | None = None
        self._lock = asyncio.Lock()

    @property
    def latest(self) -> PriceQuote | None:
        """The most recently fetched quote, or None before the first fetch."""
        return self._quote

    async def refresh(self, force: bool = False) -> PriceQuote:
        """Return a fresh quote, or the cached one while within the cooldown.

        Raises:
            PriceUnavailableError: If a fetch is needed and the source fails.
        """
        async with self._lock:
            now = self._clock()
            if (
                not force
                and self._quote is not None
                and self._last_fetch is not None
                and now - self._last_fetch < self._cooldown
            ):
                logger.debug(
                    "price_refresh_skipped",
                    seconds_since_fetch=round(now - self._last_fetch, 1),
                )
                return self._quote

            quote = await self._source.fetch_quote()
            self._quote = quote
            self._last_fetch = now
            logger.info(
                "price_refreshed",
                price=str(quote.price),
                change_24h_pct=(
                    str(quote.change_24h_pct) if quote.change_24h_pct is not None else None
                ),
                forced=force,
            )
            return quote

    async def price_for_date(self, day: date) -> Decimal:
        """Historical daily close for the purchase form; never cached."""
        return await self._source.fetch_price_for_date(day)
