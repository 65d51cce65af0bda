"""On-chain OHLCV adapter backed by Bitquery's DEX trade aggregation API.

Bitquery buckets DEX trades into time windows. Per bucket it returns the
first and last trade price (used as open/close), the 10th and 90th price
percentiles (used as low/high) and the summed USD volume.

Percentiles stand in for the true extremes on purpose: the aggregation
endpoint cannot return intra-bucket min/max, and a single manipulated
trade must not set a bucket's high or low.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx

from ta_charts.config import BitquerySettings
from ta_charts.exceptions import EmptyResultError, MalformedResponseError, UpstreamError
from ta_charts.logging import get_logger, log_elapsed
from ta_charts.models import Candle, IntervalUnit, TradingPair
from ta_charts.ohlcv.base import CandleSource
from ta_charts.ohlcv.timeframes import parse_time_ago, to_iso_utc, unit_value

logger = get_logger(__name__)

OHLCV_QUERY = """
query tradingViewPairs(
  $network: evm_network,
  $dataset: dataset_arg_enum,
  $interval: Int,
  $token: String,
  $base: String,
  $time_ago: DateTime,
  $interval_frequency: OLAP_DateTimeIntervalUnits
) {
  EVM(network: $network, dataset: $dataset) {
    DEXTradeByTokens(
      where: {
        Trade: {
          Side: {
            Amount: {gt: "0"},
            Currency: {SmartContract: {is: $token}}
          },
          Currency: {SmartContract: {is: $base}}
        },
        Block: {Time: {since: $time_ago}}
      }
      orderBy: {ascendingByField: "Block_Time"}
    ) {
      Block {
        Time(interval: {count: $interval, in: $interval_frequency})
      }
      min: quantile(of: Trade_PriceInUSD, level: 0.1)
      max: quantile(of: Trade_PriceInUSD, level: 0.9)
      volume: sum(of: Trade_Side_AmountInUSD)
      Trade {
        open: PriceInUSD(minimum: Block_Time)
        close: PriceInUSD(maximum: Block_Time)
      }
    }
  }
}
"""

#: Catalog chain name -> Bitquery evm_network value.
CHAIN_NETWORKS: dict[str, str] = {
    "ethereum": "eth",
    "arbitrum": "arbitrum",
    "binance smart chain": "bsc",
    "bsc": "bsc",
    "base": "base",
    "polygon": "matic",
    "optimism": "optimism",
    "opbnb": "opbnb",
}


def map_chain_name(chain_name: str) -> str:
    """Translate a catalog chain name to a Bitquery network.

    Unknown chains pass through lowercased; Bitquery rejects them itself.
    """
    key = chain_name.lower()
    return CHAIN_NETWORKS.get(key, key)


# ──────────────────────────────────────────────
# Response decoding
# ──────────────────────────────────────────────


@dataclass(frozen=True)
class BitqueryTrades:
    """Successful response: the raw trade buckets, possibly empty."""

    buckets: list[dict[str, Any]]


@dataclass(frozen=True)
class BitqueryErrors:
    """GraphQL error response."""

    messages: list[str]


BitqueryResult = BitqueryTrades | BitqueryErrors


def decode_response(payload: Any) -> BitqueryResult:
    """Classify a decoded JSON body once, at the boundary.

    Errors are accepted at the top level (GraphQL standard) and nested under
    ``data``. Raises MalformedResponseError when the body is neither an error
    list nor the expected ``data.EVM.DEXTradeByTokens`` list.
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError("Bitquery response is not a JSON object")

    data = payload.get("data")
    errors = payload.get("errors")
    if not errors and isinstance(data, dict):
        errors = data.get("errors")
    if errors:
        if not isinstance(errors, list):
            errors = [errors]
        return BitqueryErrors(
            messages=[
                str(e.get("message", e)) if isinstance(e, dict) else str(e)
                for e in errors
            ]
        )

    try:
        buckets = data["EVM"]["DEXTradeByTokens"]  # type: ignore[index]
    except (KeyError, TypeError) as e:
        raise MalformedResponseError(
            "Bitquery response is missing data.EVM.DEXTradeByTokens"
        ) from e
    if not isinstance(buckets, list):
        raise MalformedResponseError("Bitquery DEXTradeByTokens is not a list")

    return BitqueryTrades(buckets=buckets)


def bucket_to_candle(bucket: dict[str, Any]) -> Candle:
    """Map one trade bucket to a Candle.

    high/low come from the 90th/10th price percentiles. Bucket times without
    an offset are UTC.
    """
    try:
        bucket_start = parse_time_ago(bucket["Block"]["Time"])
        return Candle(
            time=int(bucket_start.timestamp()),
            open=_to_decimal(bucket["Trade"]["open"]),
            high=_to_decimal(bucket["max"]),
            low=_to_decimal(bucket["min"]),
            close=_to_decimal(bucket["Trade"]["close"]),
            volume=_to_decimal(bucket["volume"]),
        )
    except (KeyError, TypeError, AttributeError, ValueError, InvalidOperation) as e:
        raise MalformedResponseError(f"Unexpected Bitquery trade bucket: {bucket!r}") from e


def _to_decimal(value: Any) -> Decimal:
    # str() first so JSON floats keep their shortest repr
    return Decimal(str(value))


# ──────────────────────────────────────────────
# Adapter
# ──────────────────────────────────────────────


class OnChainAdapter(CandleSource):
    """Aggregates DEX trades into candles through Bitquery.

    The httpx client is owned by the caller and shared across requests.

    Usage:
        async with httpx.AsyncClient(timeout=30) as client:
            adapter = OnChainAdapter(client, settings.bitquery)
            candles = await adapter.fetch(pair, since, 1, "hours")
    """

    def __init__(self, client: httpx.AsyncClient, settings: BitquerySettings) -> None:
        self._client = client
        self._settings = settings

    def build_variables(
        self,
        pair: TradingPair,
        since: datetime,
        interval: int,
        unit: str | IntervalUnit,
    ) -> dict[str, Any]:
        return {
            "network": map_chain_name(pair.base_chain),
            "base": pair.base_token_address,
            "token": pair.quote_token_address,
            "time_ago": to_iso_utc(since),
            "interval": interval,
            "dataset": self._settings.dataset,
            "interval_frequency": unit_value(unit),
        }

    async def fetch(
        self,
        pair: TradingPair,
        since: datetime,
        interval: int,
        unit: str | IntervalUnit,
    ) -> list[Candle]:
        """Submit the aggregation query and normalize the buckets.

        Raises UpstreamError for error payloads and HTTP failures,
        MalformedResponseError for unexpected shapes, and EmptyResultError
        when no trades fall in the window.
        """
        variables = self.build_variables(pair, since, interval, unit)

        with log_elapsed(
            logger,
            "bitquery_fetch",
            network=variables["network"],
            base=pair.base_token_address,
        ):
            payload = await self._post({"query": OHLCV_QUERY, "variables": variables})

            result = decode_response(payload)
            if isinstance(result, BitqueryErrors):
                raise UpstreamError(f"Bitquery error: {result.messages[0]}")

            if not result.buckets:
                raise EmptyResultError(
                    "No trades found for the given token and quote currency."
                )

            return [bucket_to_candle(bucket) for bucket in result.buckets]

    async def _post(self, body: dict[str, Any]) -> Any:
        """POST the query document and return the decoded JSON body.

        HTTP error statuses surface the GraphQL error message when the body
        carries one.
        """
        api_key = self._settings.api_key.get_secret_value()
        try:
            response = await self._client.post(
                self._settings.url,
                json=body,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {api_key}",
                },
            )
        except httpx.HTTPError as e:
            raise UpstreamError(f"Bitquery request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error:
            message = f"HTTP {response.status_code}"
            if isinstance(payload, dict) and payload.get("errors"):
                decoded = decode_response(payload)
                if isinstance(decoded, BitqueryErrors):
                    message = decoded.messages[0]
            raise UpstreamError(f"Bitquery error: {message}")

        if payload is None:
            raise MalformedResponseError("Bitquery response is not valid JSON")
        return payload
