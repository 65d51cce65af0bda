"""On-disk store of rendered chart SVGs served by the MCP chart resource."""

import re
import time
from pathlib import Path

from ta_charts.exceptions import ChartNotFoundError
from ta_charts.logging import get_logger

logger = get_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^a-z0-9_-]+")


def chart_file_prefix(token_name: str) -> str:
    """Lowercased, filesystem-safe token name used to prefix chart files."""
    return _UNSAFE_CHARS.sub("-", token_name.lower()).strip("-") or "token"


class ChartFileStore:
    """Saves charts as ``<token>_candlestick_<unix_ms>.svg`` in one directory."""

    def __init__(self, output_dir: str | Path) -> None:
        self._dir = Path(output_dir)

    @property
    def directory(self) -> Path:
        return self._dir

    def save(self, token_name: str, svg: bytes) -> Path:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._dir / (
            f"{chart_file_prefix(token_name)}_candlestick_{int(time.time() * 1000)}.svg"
        )
        path.write_bytes(svg)
        logger.debug("chart_saved", path=str(path))
        return path

    def latest(self, token_name: str) -> bytes:
        """Return the newest saved chart for a token.

        Raises ChartNotFoundError if there is none.
        """
        prefix = chart_file_prefix(token_name)
        candidates = []
        if self._dir.is_dir():
            candidates = [
                p
                for p in self._dir.iterdir()
                if p.name.startswith(prefix)
                and "candlestick" in p.name
                and p.suffix == ".svg"
            ]
        if not candidates:
            raise ChartNotFoundError(f"Chart not found for token {token_name}")

        newest = max(candidates, key=lambda p: (p.stat().st_mtime, p.name))
        return newest.read_bytes()
