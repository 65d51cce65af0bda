"""Configuration system using pydantic-settings with environment variable loading."""

from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """SQLite database holding the trading-pair catalog and candle store."""

    model_config = SettingsConfigDict(env_prefix="DATABASE_")

    path: str = "data/ta_charts.db"


class BitquerySettings(BaseSettings):
    """Bitquery streaming GraphQL endpoint used for on-chain OHLCV."""

    model_config = SettingsConfigDict(env_prefix="BITQUERY_")

    api_key: SecretStr = SecretStr("")
    url: str = "https://streaming.bitquery.io/graphql"
    dataset: str = "archive"
    timeout_seconds: float = 30.0


class IndicatorSettings(BaseSettings):
    """EMA windows for the fast and slow trend lines."""

    model_config = SettingsConfigDict(env_prefix="INDICATOR_")

    ema_fast_window: int = 12
    ema_slow_window: int = 26


class ChartSettings(BaseSettings):
    """Candlestick chart rendering options.

    When save_files is enabled every rendered chart is also written to
    output_dir so it can be served back through the MCP chart resource.
    """

    model_config = SettingsConfigDict(env_prefix="CHART_")

    width: int = 800  # pixels
    height: int = 400  # pixels
    dpi: int = 100
    output_dir: str = "charts"
    save_files: bool = True


class ServerSettings(BaseSettings):
    """MCP server and HTTP listener configuration."""

    model_config = SettingsConfigDict(env_prefix="SERVER_")

    name: str = "mcp-chart"
    host: str = "0.0.0.0"
    port: int = 3001
    transport: Literal["sse", "stdio"] = "sse"


class SyncSettings(BaseSettings):
    """Binance candle ingestion configuration.

    Controls which kline intervals are mirrored into the candle store,
    how far back the first sync reaches, and retry behavior.
    All fields configurable via SYNC_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="SYNC_")

    intervals: list[str] = ["1h", "1d"]
    lookback_days: int = 90
    batch_limit: int = 1000  # Binance kline max per call
    max_retries: int = 5
    retry_base_delay: float = 1.0
    fetch_batch_delay: float = 0.1


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    database: DatabaseSettings = DatabaseSettings()
    bitquery: BitquerySettings = BitquerySettings()
    indicators: IndicatorSettings = IndicatorSettings()
    chart: ChartSettings = ChartSettings()
    server: ServerSettings = ServerSettings()
    sync: SyncSettings = SyncSettings()
