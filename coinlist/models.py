"""Domain models for the coin list explorer."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, Mapping, Sequence

from .errors import FormatFailure

ASSET_FIELDS = ("id", "symbol", "name")


@dataclass(frozen=True)
class Asset:
    """A tradable instrument listed by the market-data API."""

    id: str
    symbol: str
    name: str

    @classmethod
    def from_json(cls, record: Any) -> "Asset":
        if not isinstance(record, Mapping):
            raise FormatFailure(f"Coin record is not an object: {record!r}")
        values = {}
        for field in ASSET_FIELDS:
            value = record.get(field)
            if not isinstance(value, str):
                raise FormatFailure(f"Coin record is missing a '{field}' string: {record!r}")
            values[field] = value
        if not values["id"]:
            raise FormatFailure(f"Coin record has an empty id: {record!r}")
        return cls(**values)

    def matches(self, query: str) -> bool:
        return query in self.symbol or query in self.name or query in self.id


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


@dataclass(frozen=True)
class PricePoint:
    """One sample of the price history, timestamped in epoch milliseconds."""

    timestamp_ms: int
    price_usd: float

    @classmethod
    def from_sample(cls, sample: Any) -> "PricePoint":
        if (
            not isinstance(sample, Sequence)
            or isinstance(sample, str)
            or len(sample) != 2
            or not all(_is_number(value) for value in sample)
        ):
            raise FormatFailure(f"Price sample is not a [timestamp, price] pair: {sample!r}")
        if sample[0] != int(sample[0]):
            raise FormatFailure(f"Price sample timestamp is not whole milliseconds: {sample!r}")
        return cls(timestamp_ms=int(sample[0]), price_usd=float(sample[1]))

    @property
    def is_valid(self) -> bool:
        # The API pads some series with [0, 0] samples.
        return self.timestamp_ms != 0


@dataclass(frozen=True)
class CalculatorState:
    """USD amount and asset quantity tied together by the latest price."""

    usd_amount: float = 0.0
    quantity: float = 0.0
    current_price: float = 0.0


class SessionStatus(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"
