"""Repositories responsible for fetching market data."""
from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from .config import DEFAULT_BASE_URL, HISTORY_DAYS, VS_CURRENCY, CoinlistConfig
from .errors import FormatFailure, LoadFailure
from .logger import get_logger

logger = get_logger(__name__)


class MarketDataRepository:
    """Fetches the coin list and price histories from a CoinGecko-style API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: CoinlistConfig, session: Optional[Any] = None) -> "MarketDataRepository":
        return cls(base_url=config.base_url, session=session, timeout=config.timeout)

    def fetch_coin_list(self) -> Any:
        return self._get_json("/coins/list", failure="Failed to load Coins!")

    def fetch_market_chart(self, coin_id: str, days: int = HISTORY_DAYS) -> Any:
        return self._get_json(
            f"/coins/{quote(coin_id, safe='')}/market_chart",
            params={"vs_currency": VS_CURRENCY, "days": days},
            failure=f'Failed to load detail data for "{coin_id}"!',
        )

    def _get_json(
        self,
        path: str,
        *,
        failure: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        logger.info("GET %s params=%s", url, params)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Request to %s failed: %s", url, exc)
            raise LoadFailure(f"{failure} ({exc})", url=url) from exc

        if response.status_code != 200:
            logger.error("Request to %s returned HTTP %s", url, response.status_code)
            raise LoadFailure(
                f"{failure} (HTTP {response.status_code})",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            logger.error("Response from %s is not valid JSON: %s", url, exc)
            raise FormatFailure(f"{failure} (invalid JSON)") from exc
