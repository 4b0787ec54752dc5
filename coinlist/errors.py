"""Errors raised while loading market data."""
from __future__ import annotations

from typing import Optional


class CoinlistError(Exception):
    """Base class for coin list failures."""


class LoadFailure(CoinlistError):
    """The transport did not return a successful response."""

    def __init__(self, message: str, *, url: str = "", status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FormatFailure(CoinlistError):
    """The payload was empty or did not have the expected structure."""
