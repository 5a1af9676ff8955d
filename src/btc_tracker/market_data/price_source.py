"""Price sources for the live and historical BTC/USD price.

Dashboard and entry code depend only on the PriceSource interface; the
ccxt-backed implementation keeps exchange specifics in one place.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

import ccxt.async_support as ccxt_async

from btc_tracker.config import PriceSettings
from btc_tracker.exceptions import PriceUnavailableError
from btc_tracker.logging import get_logger
from btc_tracker.models import PriceQuote

logger = get_logger(__name__)


def _positive_decimal(value: Any) -> Decimal | None:
    """Decimal for a positive finite price, None for anything else."""
    if value is None:
        return None
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return None
    if not number.is_finite() or number <= 0:
        return None
    return number


def _optional_change(value: Any) -> Decimal | None:
    if value is None:
        return None
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


class PriceSource(ABC):
    """Abstract source of BTC prices in USD."""

    @abstractmethod
    async def connect(self) -> None:
        """Prepare the source (load markets, open sessions)."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""
        ...

    @abstractmethod
    async def fetch_quote(self) -> PriceQuote:
        """Fetch the current price and 24h percent change.

        Raises:
            PriceUnavailableError: If no positive finite price is available.
        """
        ...

    @abstractmethod
    async def fetch_price_for_date(self, day: date) -> Decimal:
        """Fetch the daily closing price for a past calendar day (UTC).

        Raises:
            PriceUnavailableError: If the exchange has no candle for that day.
        """
        ...


class CcxtPriceSource(PriceSource):
    """Price source backed by any ccxt exchange with a BTC/USD market.

    Args:
        settings: Exchange id, market symbol and request timeout.
    """

    def __init__(self, settings: PriceSettings) -> None:
        if settings.exchange_id not in ccxt_async.exchanges:
            raise ValueError(f"Unknown ccxt exchange: {settings.exchange_id}")
        self._settings = settings
        exchange_class = getattr(ccxt_async, settings.exchange_id)
        self._exchange = exchange_class(
            {
                "enableRateLimit": True,
                "timeout": settings.timeout_ms,
            }
        )

    @property
    def exchange(self) -> ccxt_async.Exchange:
        """Access the underlying ccxt exchange instance."""
        return self._exchange

    async def connect(self) -> None:
        logger.info("connecting_price_source", exchange=self._settings.exchange_id)
        await self._exchange.load_markets()

    async def close(self) -> None:
        """Clean up ccxt async resources."""
        await self._exchange.close()
        logger.info("price_source_closed", exchange=self._settings.exchange_id)

    async def fetch_quote(self) -> PriceQuote:
        symbol = self._settings.symbol
        try:
            ticker = await self._exchange.fetch_ticker(symbol)
        except ccxt_async.BaseError as e:
            logger.warning("price_fetch_failed", symbol=symbol, error=str(e))
            raise PriceUnavailableError(f"Failed to fetch {symbol} price") from e

        price = _positive_decimal(ticker.get("last"))
        if price is None:
            logger.warning("price_missing_in_ticker", symbol=symbol, last=ticker.get("last"))
            raise PriceUnavailableError(f"No usable {symbol} price in ticker")

        timestamp = ticker.get("timestamp")
        if timestamp:
            fetched_at = datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)
        else:
            fetched_at = datetime.now(timezone.utc)

        return PriceQuote(
            price=price,
            change_24h_pct=_optional_change(ticker.get("percentage")),
            fetched_at=fetched_at,
        )

    async def fetch_price_for_date(self, day: date) -> Decimal:
        symbol = self._settings.symbol
        day_start = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
        since = int(day_start.timestamp() * 1000)
        try:
            candles = await self._exchange.fetch_ohlcv(symbol, "1d", since=since, limit=1)
        except ccxt_async.BaseError as e:
            logger.warning(
                "historical_price_fetch_failed",
                symbol=symbol,
                day=day.isoformat(),
                error=str(e),
            )
            raise PriceUnavailableError(
                f"Failed to fetch {symbol} price for {day.isoformat()}"
            ) from e

        # [timestamp_ms, open, high, low, close, volume]
        if not candles or candles[0][0] != since:
            raise PriceUnavailableError(f"No {symbol} candle for {day.isoformat()}")
        close = _positive_decimal(candles[0][4])
        if close is None:
            raise PriceUnavailableError(f"No usable {symbol} close for {day.isoformat()}")
        return close
