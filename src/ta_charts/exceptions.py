"""Custom exceptions for the chart tools server.

Every failure on the request path derives from ChartToolsError so the
MCP and HTTP layers can turn it into a caller-visible message.
"""


class ChartToolsError(Exception):
    """Base exception for all chart tools errors."""


class InvalidTradingPairError(ChartToolsError, ValueError):
    """Raised when a catalog entry lacks the fields its venue requires."""


class NotFoundError(ChartToolsError):
    """Raised when a requested entity does not exist."""


class TokenNotFoundError(NotFoundError):
    """Raised when no catalog trading pair matches a token name."""


class ChartNotFoundError(NotFoundError):
    """Raised when no saved chart file exists for a token."""


class NoDataError(ChartToolsError):
    """Raised when a data source query succeeded but matched zero candles."""


class EmptyResultError(NoDataError):
    """Raised when the on-chain service returned no trade buckets."""


class UpstreamError(ChartToolsError):
    """Raised when a remote service reports an error."""


class MalformedResponseError(ChartToolsError):
    """Raised when a remote response does not have the expected shape."""
