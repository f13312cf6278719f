"""Wallet address validation."""

from __future__ import annotations

from typing import Any

import base58
from solders.pubkey import Pubkey

from blink_actions.core.exceptions import InvalidAddress

PUBKEY_LENGTH = 32
# base58 text of 32 bytes is at most 44 characters
MAX_ADDRESS_LENGTH = 44


def parse_address(value: Any, field: str = "account") -> Pubkey:
    """
    Decode a base58 Solana address into a Pubkey.

    Raises InvalidAddress when the value is not a string, contains characters
    outside the base58 alphabet, is longer than 44 characters, or does not
    decode to exactly 32 bytes. Length is checked before decoding.
    """
    if not isinstance(value, str):
        raise InvalidAddress(f"Invalid {field}: expected a base58 string")
    text = value.strip()
    if not text:
        raise InvalidAddress(f"Invalid {field}: must be non-empty")
    if len(text) > MAX_ADDRESS_LENGTH:
        raise InvalidAddress(
            f"Invalid {field}: too long ({len(text)} characters, max {MAX_ADDRESS_LENGTH})"
        )
    try:
        raw = base58.b58decode(text)
    except ValueError as e:
        raise InvalidAddress(f"Invalid {field}: not a base58 string") from e
    if len(raw) != PUBKEY_LENGTH:
        raise InvalidAddress(
            f"Invalid {field}: decodes to {len(raw)} bytes, expected {PUBKEY_LENGTH}"
        )
    return Pubkey.from_bytes(raw)


def is_valid_wallet(w: str) -> bool:
    """Return True if w is a valid Solana wallet (Pubkey) address."""
    try:
        parse_address(w)
        return True
    except InvalidAddress:
        return False
