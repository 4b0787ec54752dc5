"""Two-way USD/quantity price calculator."""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Optional

from ..models import CalculatorState

UNSIGNED_DECIMAL = re.compile(r"^[0-9]+\.?[0-9]*$")
# One optional leading "$", commas only between groups of three digits
USD_AMOUNT = re.compile(r"^\$?(?:[0-9]{1,3}(?:,[0-9]{3})+|[0-9]+)(?:\.[0-9]*)?$")
QUANTITY_DECIMALS = 10


@dataclass(frozen=True)
class CalculatorEdit:
    """Outcome of one edit: the new state and the field texts to show.

    A field left as ``None`` keeps whatever the user typed there.
    """

    state: CalculatorState
    usd_field: Optional[str] = None
    qty_field: Optional[str] = None
    warning: Optional[str] = None


def set_usd(state: CalculatorState, amount: float) -> CalculatorState:
    """Set the USD amount and derive the quantity it buys at the current price.

    Without a known price the quantity is left as it was.
    """
    if state.current_price > 0:
        return replace(state, usd_amount=amount, quantity=amount / state.current_price)
    return replace(state, usd_amount=amount)


def set_quantity(state: CalculatorState, qty: float) -> CalculatorState:
    """Set the quantity and derive its USD value, rounded to cents."""
    return replace(state, quantity=qty, usd_amount=round(state.current_price * qty, 2))


def with_price(state: CalculatorState, current_price: float) -> CalculatorState:
    # Keep the quantity the user typed and re-price it.
    return set_quantity(replace(state, current_price=current_price), state.quantity)


def parse_usd_text(text: str) -> float:
    cleaned = text.strip()
    if not USD_AMOUNT.match(cleaned):
        raise ValueError(f"Not a USD amount: {text!r}")
    return float(cleaned.lstrip("$").replace(",", ""))


def parse_quantity_text(text: str) -> float:
    cleaned = text.strip()
    if not UNSIGNED_DECIMAL.match(cleaned):
        raise ValueError(f"Not a quantity: {text!r}")
    return float(cleaned)


def format_usd(amount: float) -> str:
    return f"${amount:,.2f}"


def usd_text(state: CalculatorState) -> str:
    return f"{state.usd_amount:.2f}"


def format_quantity(qty: float) -> str:
    text = f"{qty:.{QUANTITY_DECIMALS}f}".rstrip("0").rstrip(".")
    return text or "0"


def edit_usd(state: CalculatorState, text: str) -> CalculatorEdit:
    if not text.strip():
        return CalculatorEdit(state)
    try:
        amount = parse_usd_text(text)
    except ValueError as exc:
        return CalculatorEdit(state, warning=str(exc))
    state = set_usd(state, amount)
    return CalculatorEdit(
        state,
        usd_field=format_usd(state.usd_amount),
        qty_field=format_quantity(state.quantity),
    )


def edit_quantity(state: CalculatorState, text: str) -> CalculatorEdit:
    if not text.strip():
        return CalculatorEdit(state)
    try:
        qty = parse_quantity_text(text)
    except ValueError as exc:
        return CalculatorEdit(state, warning=str(exc))
    state = set_quantity(state, qty)
    return CalculatorEdit(state, usd_field=format_usd(state.usd_amount))
