"""Component wiring for hosts embedding the tracker (API server, bot, app backend).

Wiring order:
1. AppSettings (configuration)
2. Logging setup
3. CcxtPriceSource (live/historical prices)
4. PriceService (refresh cooldown cache)
5. PurchaseEntry (form validation with date/display settings)

The store and the screens stay with the host; it passes the ledger and
settings it loaded to load_dashboard() together with the PriceService.
"""

from dataclasses import dataclass

from btc_tracker.config import AppSettings
from btc_tracker.entry.purchase_form import PurchaseEntry
from btc_tracker.logging import get_logger, setup_logging
from btc_tracker.market_data.price_service import PriceService
from btc_tracker.market_data.price_source import CcxtPriceSource, PriceSource

logger = get_logger(__name__)


@dataclass
class Components:
    """Long-lived tracker services built from settings."""

    settings: AppSettings
    price_source: PriceSource
    price_service: PriceService
    purchase_entry: PurchaseEntry

    async def start(self) -> None:
        await self.price_source.connect()

    async def close(self) -> None:
        """Release the price source. Must be called to avoid leaking ccxt sessions."""
        await self.price_source.close()


def build_components(settings: AppSettings | None = None) -> Components:
    """Build all tracker components from settings.

    Does NOT connect the price source; call Components.start() from the
    host's startup hook.
    """
    settings = settings or AppSettings()
    setup_logging(settings.log_level)

    price_source = CcxtPriceSource(settings.price)
    price_service = PriceService(
        price_source,
        cooldown_seconds=settings.price.refresh_cooldown_seconds,
    )
    purchase_entry = PurchaseEntry(settings.dates, settings.display)

    logger.info(
        "components_built",
        exchange=settings.price.exchange_id,
        symbol=settings.price.symbol,
    )
    return Components(
        settings=settings,
        price_source=price_source,
        price_service=price_service,
        purchase_entry=purchase_entry,
    )
