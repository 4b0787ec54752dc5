"""Price history and calculator state for a single coin."""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple

import pandas as pd
from dateutil.relativedelta import relativedelta

from ..config import HISTORY_DAYS
from ..errors import CoinlistError, FormatFailure
from ..logger import get_logger
from ..models import Asset, CalculatorState, PricePoint, SessionStatus
from . import calculator

logger = get_logger(__name__)

CHART_COLUMNS = ["Date", "Price (USD)"]


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" + ("s" if count != 1 else "")


def format_period(start: date, end: date) -> str:
    """Describe the distance between two days in years, months and days."""
    rd = relativedelta(end, start)
    parts: List[str] = []
    if rd.years:
        parts.append(_plural(rd.years, "year"))
    if rd.months:
        parts.append(_plural(rd.months, "month"))
    if rd.days:
        parts.append(_plural(rd.days, "day"))

    if not parts:
        return "0 days"
    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2:
        return " and ".join(parts)
    return f"{parts[0]}, {parts[1]} and {parts[2]}"


def _to_date(timestamp_ms: int) -> date:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).date()


class ChartSeries:
    """Restartable view of a raw series without the zero-timestamp samples."""

    def __init__(self, raw: Sequence[PricePoint]) -> None:
        self._raw = raw

    def __iter__(self) -> Iterator[PricePoint]:
        return (point for point in self._raw if point.is_valid)


def parse_price_series(payload: Any) -> Tuple[PricePoint, ...]:
    if not isinstance(payload, Mapping) or not payload:
        raise FormatFailure("Failed to load coin details")
    prices = payload.get("prices")
    if not isinstance(prices, list) or not prices:
        raise FormatFailure("Failed to load coin details: no prices in response")
    return tuple(PricePoint.from_sample(sample) for sample in prices)


class CoinDetailSession:
    """Loads one coin's price history and owns its calculator.

    The current price comes from the last raw sample, even when that sample
    is one of the zero-timestamp entries the chart leaves out.
    """

    def __init__(self, asset: Asset, repository, days: int = HISTORY_DAYS) -> None:
        self.asset = asset
        self.days = days
        self._repository = repository
        self._raw: Tuple[PricePoint, ...] = ()
        self.status = SessionStatus.LOADING
        self.error: Optional[CoinlistError] = None
        self.calculator = CalculatorState()

    @property
    def raw_series(self) -> Tuple[PricePoint, ...]:
        return self._raw

    @property
    def current_price(self) -> float:
        return self.calculator.current_price

    def load(self) -> None:
        if self.status == SessionStatus.LOADED:
            return
        if self.status == SessionStatus.FAILED and self.error is not None:
            raise self.error
        if not self.asset.id:
            raise ValueError("asset id must be a non-empty string")

        try:
            raw = parse_price_series(
                self._repository.fetch_market_chart(self.asset.id, days=self.days)
            )
        except CoinlistError as exc:
            logger.warning("Could not load history for %s: %s", self.asset.id, exc)
            self.status = SessionStatus.FAILED
            self.error = exc
            raise

        self._raw = raw
        current_price = raw[-1].price_usd
        self.calculator = calculator.with_price(self.calculator, current_price)
        self.status = SessionStatus.LOADED
        logger.info(
            "Loaded %d price samples for %s; current price %s",
            len(raw),
            self.asset.id,
            current_price,
        )

    def chart_series(self) -> ChartSeries:
        return ChartSeries(self._raw)

    def chart_frame(self) -> pd.DataFrame:
        points = list(self.chart_series())
        return pd.DataFrame(
            {
                "Date": pd.to_datetime([p.timestamp_ms for p in points], unit="ms"),
                "Price (USD)": [p.price_usd for p in points],
            },
            columns=CHART_COLUMNS,
        )

    def covered_period(self) -> Optional[str]:
        points = list(self.chart_series())
        if not points:
            return None
        return format_period(_to_date(points[0].timestamp_ms), _to_date(points[-1].timestamp_ms))

    def set_usd(self, amount: float) -> CalculatorState:
        self.calculator = calculator.set_usd(self.calculator, amount)
        return self.calculator

    def set_quantity(self, qty: float) -> CalculatorState:
        self.calculator = calculator.set_quantity(self.calculator, qty)
        return self.calculator

    def edit_usd(self, text: str) -> calculator.CalculatorEdit:
        """Apply text typed into the USD field; bad input only yields a warning."""
        edit = calculator.edit_usd(self.calculator, text)
        self.calculator = edit.state
        return edit

    def edit_quantity(self, text: str) -> calculator.CalculatorEdit:
        edit = calculator.edit_quantity(self.calculator, text)
        self.calculator = edit.state
        return edit
