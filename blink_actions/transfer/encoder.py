"""
Transaction wire encoding.

Serializes a legacy Transaction with solders (canonical Solana wire format,
deterministic) and base64-encodes it with the standard padded alphabet.
"""

from __future__ import annotations

import base64
import binascii

from solders.transaction import Transaction

from blink_actions.core.exceptions import EncodingFailure


def serialize_transaction(tx: Transaction) -> bytes:
    """
    Canonical bytes of an unsigned single-signer transaction.

    Raises EncodingFailure when the transaction has no instructions, needs
    more than the fee payer's signature, or the serializer rejects it.
    """
    message = tx.message
    if len(message.instructions) == 0:
        raise EncodingFailure("transaction has no instructions")
    required = message.header.num_required_signatures
    if required != 1:
        raise EncodingFailure(f"expected exactly 1 required signature, got {required}")
    if len(tx.signatures) != required:
        raise EncodingFailure("signature slots do not match required signatures")
    try:
        return bytes(tx)
    except Exception as e:
        raise EncodingFailure(f"serialization failed: {e}") from e


def encode_transaction(tx: Transaction) -> str:
    """Base64 text of the serialized transaction."""
    return base64.b64encode(serialize_transaction(tx)).decode("ascii")


def decode_transaction(encoded: str) -> Transaction:
    """Parse base64 text back into a Transaction. Raises ValueError on invalid base64."""
    try:
        raw = base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        raise ValueError(f"transaction is not valid base64: {e}") from e
    return Transaction.from_bytes(raw)
