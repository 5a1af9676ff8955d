"""Configuration system using pydantic-settings with environment variable loading."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class PriceSettings(BaseSettings):
    """Live price source settings (any ccxt exchange with a BTC/USD market)."""

    model_config = SettingsConfigDict(env_prefix="PRICE_")

    exchange_id: str = "kraken"
    symbol: str = "BTC/USD"
    refresh_cooldown_seconds: float = 60.0  # 1 minute between live fetches
    timeout_ms: int = 10000


class DisplaySettings(BaseSettings):
    """Decimal places used when echoing typed values back into input fields."""

    model_config = SettingsConfigDict(env_prefix="DISPLAY_")

    usd_input_decimals: int = 2
    btc_input_decimals: int = 8


class DateSettings(BaseSettings):
    """Purchase date constraints."""

    model_config = SettingsConfigDict(env_prefix="DATE_")

    min_year: int = 1900


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    price: PriceSettings = PriceSettings()
    display: DisplaySettings = DisplaySettings()
    dates: DateSettings = DateSettings()
