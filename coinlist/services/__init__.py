"""Service layer abstractions for the coin list app."""
from .calculator import (
    CalculatorEdit,
    edit_quantity,
    edit_usd,
    format_quantity,
    format_usd,
    parse_quantity_text,
    parse_usd_text,
    set_quantity,
    set_usd,
    usd_text,
)
from .catalog import CoinCatalog
from .details import ChartSeries, CoinDetailSession, format_period

__all__ = [
    "CalculatorEdit",
    "ChartSeries",
    "CoinCatalog",
    "CoinDetailSession",
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
