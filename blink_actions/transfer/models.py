"""
Data models for the transfer pipeline.

All values are request-scoped and immutable.
"""

from __future__ import annotations

from dataclasses import dataclass

from solders.hash import Hash
from solders.pubkey import Pubkey


@dataclass(frozen=True)
class Anchor:
    """
    Recent blockhash from getLatestBlockhash.

    Bounds the validity window of the transaction; fetched fresh per request.
    """

    blockhash: Hash
    last_valid_block_height: int | None = None

    @classmethod
    def from_rpc_value(cls, value: object) -> "Anchor":
        """Build from a getLatestBlockhash result value (blockhash + lastValidBlockHeight)."""
        return cls(
            blockhash=value.blockhash,  # type: ignore[attr-defined]
            last_valid_block_height=getattr(value, "last_valid_block_height", None),
        )


@dataclass(frozen=True)
class TransferResult:
    """Successful pipeline output: the action POST response plus what went into it."""

    transaction: str
    message: str
    sender: Pubkey
    receiver: Pubkey
    lamports: int
    anchor: Anchor

    def to_response(self) -> dict[str, str]:
        return {"transaction": self.transaction, "message": self.message}
