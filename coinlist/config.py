"""Static configuration for the market-data API and the chart."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"
VS_CURRENCY = "usd"
HISTORY_DAYS = 365

# Roughly three months: weeks * days * hours * minutes * seconds * millis
CHART_TICK_INTERVAL_MS = 12 * 7 * 24 * 60 * 60 * 1000
CHART_LINE_COLOR = "green"
CHART_LINE_WIDTH = 3


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring COINLIST_HTTP_TIMEOUT=%r; not a number.", raw)
        return None
    if value <= 0:
        logger.warning("Ignoring COINLIST_HTTP_TIMEOUT=%r; must be positive.", raw)
        return None
    return value


@dataclass(frozen=True)
class CoinlistConfig:
    """Where to fetch market data from and how long to wait for it."""

    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "CoinlistConfig":
        base_url = os.getenv("COINGECKO_BASE_URL", "").strip() or DEFAULT_BASE_URL
        return cls(
            base_url=base_url.rstrip("/"),
            timeout=_parse_timeout(os.getenv("COINLIST_HTTP_TIMEOUT")),
        )
