"""
SOL amount parsing and conversion to lamports.

lamports = floor(amount * LAMPORTS_PER_SOL). Truncation, not rounding.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any

from blink_actions.core.exceptions import InvalidAmount

LAMPORTS_PER_SOL = 1_000_000_000
U64_MAX = 2**64 - 1


def parse_amount(raw: Any) -> float:
    """Parse the `amount` query value. Raises InvalidAmount when missing or non-numeric."""
    if raw is None:
        raise InvalidAmount("Invalid amount: amount is required")
    if isinstance(raw, bool):
        raise InvalidAmount("Invalid amount: expected a number")
    if isinstance(raw, (int, float)):
        return float(raw)
    text = str(raw).strip()
    if not text:
        raise InvalidAmount("Invalid amount: amount is required")
    try:
        return float(text)
    except ValueError as e:
        raise InvalidAmount(f"Invalid amount: {text!r} is not a number") from e


def to_lamports(amount: float) -> int:
    """
    Convert SOL to lamports.

    Zero is valid. Negative, NaN, infinite, or results above u64 raise InvalidAmount.
    """
    if not math.isfinite(amount):
        raise InvalidAmount("Invalid amount: must be a finite number")
    if amount < 0:
        raise InvalidAmount("Invalid amount: must not be negative")
    scaled = amount * LAMPORTS_PER_SOL
    if not math.isfinite(scaled):
        raise InvalidAmount("Invalid amount: too large")
    lamports = math.floor(scaled)
    if lamports > U64_MAX:
        raise InvalidAmount("Invalid amount: too large")
    return lamports


def resolve_amount(raw: Any) -> tuple[float, int]:
    """Parse and convert in one step: returns (amount_sol, lamports)."""
    amount = parse_amount(raw)
    return amount, to_lamports(amount)


def format_amount(amount: float) -> str:
    """Render a SOL amount for messages: 1.0 -> '1', 0.25 -> '0.25', 1e-07 -> '0.0000001'."""
    if amount == int(amount):
        return str(int(amount))
    # shortest round-trip digits, always fixed-point
    return format(Decimal(repr(amount)), "f")
