"""Coin list domain package."""

from .config import CoinlistConfig
from .errors import CoinlistError, FormatFailure, LoadFailure
from .messages import MessageLevel, ServiceMessage
from .models import Asset, CalculatorState, PricePoint, SessionStatus
from .repositories import MarketDataRepository
from .services import (
    CalculatorEdit,
    ChartSeries,
    CoinCatalog,
    CoinDetailSession,
    edit_quantity,
    edit_usd,
    format_period,
    format_quantity,
    format_usd,
    parse_quantity_text,
    parse_usd_text,
    set_quantity,
    set_usd,
    usd_text,
)

__all__ = [
    "Asset",
    "CalculatorEdit",
    "CalculatorState",
    "ChartSeries",
    "CoinCatalog",
    "CoinDetailSession",
    "CoinlistConfig",
    "CoinlistError",
    "FormatFailure",
    "LoadFailure",
    "MarketDataRepository",
    "MessageLevel",
    "PricePoint",
    "ServiceMessage",
    "SessionStatus",
    "edit_quantity",
    "edit_usd",
    "format_period",
    "format_quantity",
    "format_usd",
    "parse_quantity_text",
    "parse_usd_text",
    "set_quantity",
    "set_usd",
    "usd_text",
]
