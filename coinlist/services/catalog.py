"""Coin catalog loading and search."""
from __future__ import annotations

from typing import Any, Iterable, Iterator, Sequence, Tuple

import pandas as pd

from ..errors import FormatFailure
from ..logger import get_logger
from ..models import Asset

logger = get_logger(__name__)

CATALOG_COLUMNS = ["Symbol", "Name", "Id"]


class CoinCatalog:
    """Holds every known asset, in the order the API listed them."""

    def __init__(self, assets: Iterable[Asset]) -> None:
        self._assets: Tuple[Asset, ...] = tuple(assets)
        if not self._assets:
            raise FormatFailure("Failed to load coin list.")

    @classmethod
    def from_json(cls, payload: Any) -> "CoinCatalog":
        if not isinstance(payload, list) or not payload:
            raise FormatFailure("Failed to load coin list.")
        return cls(Asset.from_json(record) for record in payload)

    @classmethod
    def load(cls, repository) -> "CoinCatalog":
        """Fetch the full coin list; raises LoadFailure or FormatFailure."""
        catalog = cls.from_json(repository.fetch_coin_list())
        logger.info("Loaded %d coins", len(catalog))
        return catalog

    @property
    def assets(self) -> Tuple[Asset, ...]:
        return self._assets

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[Asset]:
        return iter(self._assets)

    def filter(self, query: str) -> Tuple[Asset, ...]:
        """Assets whose symbol, name or id contains *query*, case-sensitively.

        Every entry has to be inspected, so this is a plain linear scan. The
        list is a little over a megabyte today and only grows.
        """
        if not query:
            return self._assets
        return tuple(asset for asset in self._assets if asset.matches(query))

    @staticmethod
    def to_frame(assets: Sequence[Asset]) -> pd.DataFrame:
        rows = [
            {"Symbol": asset.symbol, "Name": asset.name, "Id": asset.id}
            for asset in assets
        ]
        return pd.DataFrame(rows, columns=CATALOG_COLUMNS)
