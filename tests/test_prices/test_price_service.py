"""Tests for PriceService refresh cooldown and forced refresh."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from btc_tracker.exceptions import PriceUnavailableError
from btc_tracker.market_data.price_service import PriceService
from btc_tracker.market_data.price_source import PriceSource
from btc_tracker.models import PriceQuote


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def source() -> MagicMock:
    mock = MagicMock(spec=PriceSource)
    mock.fetch_quote = AsyncMock(
        side_effect=[
            PriceQuote(price=Decimal("50000")),
            PriceQuote(price=Decimal("51000")),
            PriceQuote(price=Decimal("52000")),
        ]
    )
    return mock


@pytest.fixture
def service(source: MagicMock, clock: FakeClock) -> PriceService:
    return PriceService(source, cooldown_seconds=60.0, clock=clock)


class TestRefresh:
    @pytest.mark.asyncio
    async def test_first_refresh_fetches(self, service: PriceService) -> None:
        assert service.latest is None
        quote = await service.refresh()
        assert quote.price == Decimal("50000")
        assert service.latest is quote

    @pytest.mark.asyncio
    async def test_within_cooldown_reuses_quote(
        self, service: PriceService, source: MagicMock, clock: FakeClock
    ) -> None:
        await service.refresh()
        clock.now += 59
        quote = await service.refresh()
        assert quote.price == Decimal("50000")
        assert source.fetch_quote.await_count == 1

    @pytest.mark.asyncio
    async def test_after_cooldown_fetches_again(
        self, service: PriceService, source: MagicMock, clock: FakeClock
    ) -> None:
        await service.refresh()
        clock.now += 60
        quote = await service.refresh()
        assert quote.price == Decimal("51000")
        assert source.fetch_quote.await_count == 2

    @pytest.mark.asyncio
    async def test_force_bypasses_cooldown(
        self, service: PriceService, source: MagicMock
    ) -> None:
        await service.refresh()
        quote = await service.refresh(force=True)
        assert quote.price == Decimal("51000")
        assert source.fetch_quote.await_count == 2

    @pytest.mark.asyncio
    async def test_failure_propagates_and_keeps_last_quote(
        self, service: PriceService, source: MagicMock, clock: FakeClock
    ) -> None:
        await service.refresh()
        source.fetch_quote.side_effect = PriceUnavailableError("down")
        clock.now += 120
        with pytest.raises(PriceUnavailableError):
            await service.refresh()
        assert service.latest is not None
        assert service.latest.price == Decimal("50000")


class TestPriceForDate:
    @pytest.mark.asyncio
    async def test_delegates_without_caching(self, service: PriceService, source: MagicMock) -> None:
        source.fetch_price_for_date = AsyncMock(return_value=Decimal("43600.5"))
        assert await service.price_for_date(date(2023, 12, 25)) == Decimal("43600.5")
        assert await service.price_for_date(date(2023, 12, 25)) == Decimal("43600.5")
        assert source.fetch_price_for_date.await_count == 2
