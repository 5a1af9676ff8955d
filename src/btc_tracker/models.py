"""Shared data models for the Bitcoin purchase tracker.

All monetary and asset-unit values use Decimal. Floats handed over by
collaborators are converted through str() so 0.1 stays 0.1.
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from btc_tracker.normalize.dates import parse_storage_date


def to_decimal(value: Any) -> Decimal:
    """Convert a storage or exchange value to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _optional_decimal(value: Any) -> Decimal | None:
    return None if value is None else to_decimal(value)


def _optional_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass(frozen=True)
class PurchaseRecord:
    """A stored Bitcoin purchase. Numeric fields are finite and > 0."""

    id: str
    purchase_date: date
    btc_price_at_purchase: Decimal
    btc_amount: Decimal
    usd_spent: Decimal
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PurchaseRecord":
        """Build a record from a storage row (purchase_date as YYYY-MM-DD)."""
        purchase_date = row["purchase_date"]
        if not isinstance(purchase_date, date):
            purchase_date = parse_storage_date(str(purchase_date))
        return cls(
            id=str(row["id"]),
            purchase_date=purchase_date,
            btc_price_at_purchase=to_decimal(row["btc_price_at_purchase"]),
            btc_amount=to_decimal(row["btc_amount"]),
            usd_spent=to_decimal(row["usd_spent"]),
            created_at=_optional_datetime(row.get("created_at")),
        )


@dataclass
class UserSettings:
    """Per-user settings singleton; created lazily with defaults."""

    interest_enabled: bool = False
    annual_interest_rate: Decimal | None = None  # percent per year, informational
    manual_btc_balance: Decimal | None = None
    manual_balance_updated_at: datetime | None = None

    @classmethod
    def default(cls) -> "UserSettings":
        """Settings used when the store has no record for the user yet."""
        return cls()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "UserSettings":
        return cls(
            interest_enabled=bool(row.get("interest_enabled", False)),
            annual_interest_rate=_optional_decimal(row.get("annual_interest_rate")),
            manual_btc_balance=_optional_decimal(row.get("manual_btc_balance")),
            manual_balance_updated_at=_optional_datetime(
                row.get("manual_balance_updated_at")
            ),
        )


@dataclass(frozen=True)
class DashboardMetrics:
    """Portfolio figures derived from the ledger, settings and a live price.

    Recomputed on every render; never persisted.
    """

    current_btc_price: Decimal
    total_investment: Decimal
    total_bought_bitcoin: Decimal
    manual_total_bitcoin: Decimal | None
    manual_balance_updated_at: datetime | None
    final_value_purchased: Decimal
    final_value_real: Decimal
    profit_purchased: Decimal
    profit_real: Decimal
    roi_purchased: Decimal  # percent
    roi_real: Decimal  # percent
    interest_in_btc: Decimal
    interest_in_usd: Decimal
    equilibrium_price: Decimal


@dataclass(frozen=True)
class PriceQuote:
    """Live USD price for one BTC as delivered by a price source."""

    price: Decimal
    change_24h_pct: Decimal | None = None
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class PurchaseDraft:
    """A validated purchase ready to hand to storage."""

    purchase_date: str  # YYYY-MM-DD
    btc_price_at_purchase: Decimal
    btc_amount: Decimal
    usd_spent: Decimal

    def to_row(self) -> dict[str, Any]:
        """Return the insert/update mapping expected by the store."""
        return {
            "purchase_date": self.purchase_date,
            "btc_price_at_purchase": self.btc_price_at_purchase,
            "btc_amount": self.btc_amount,
            "usd_spent": self.usd_spent,
        }


@dataclass(frozen=True)
class SettingsUpdate:
    """Validated partial settings update. None leaves a field unchanged."""

    interest_enabled: bool | None = None
    annual_interest_rate: Decimal | None = None
    manual_btc_balance: Decimal | None = None
    manual_balance_updated_at: datetime | None = None

    def to_row(self) -> dict[str, Any]:
        """Return only the fields being changed, for the store's update call."""
        return {
            name: value
            for name, value in asdict(self).items()
            if value is not None
        }

    def apply(self, settings: UserSettings | None) -> UserSettings:
        """Return settings with this update applied (defaults if None)."""
        return replace(settings or UserSettings.default(), **self.to_row())
