"""Structured logging configuration using structlog with async context propagation.

All log output goes to stderr: stdout belongs to the MCP stdio transport.
"""

import logging
import os
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager

import structlog


def setup_logging(log_level: str = "INFO") -> None:
    """Configure structlog with JSON or console rendering.

    Uses structlog.contextvars for async context propagation (NOT threadlocal).
    Rendering format is controlled by the LOG_FORMAT environment variable:
    - "json" for production (machine-readable)
    - "console" for development (human-readable, default)
    """
    log_format = os.environ.get("LOG_FORMAT", "console").lower()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger with the given name."""
    return structlog.get_logger(name)


@contextmanager
def log_elapsed(
    logger: structlog.stdlib.BoundLogger, event: str, **context: object
) -> Iterator[None]:
    """Log ``<event>_completed`` or ``<event>_failed`` with elapsed seconds.

    The exception, if any, is re-raised unchanged.

    Usage:
        with log_elapsed(logger, "ohlcv_fetch", token_name="ETH"):
            candles = await adapter.fetch(...)
    """
    start = time.monotonic()
    try:
        yield
    except Exception as e:
        logger.error(
            f"{event}_failed",
            elapsed_seconds=round(time.monotonic() - start, 2),
            error=str(e),
            error_type=type(e).__name__,
            **context,
        )
        raise
    logger.info(
        f"{event}_completed",
        elapsed_seconds=round(time.monotonic() - start, 2),
        **context,
    )
