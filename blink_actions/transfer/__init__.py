"""
Transfer package — builds unsigned native SOL transfer transactions.

Validates the caller's account and amount, fetches a recent blockhash,
assembles a System Program transfer with the caller as fee payer, and
encodes it as base64 for the caller's wallet to sign.
"""

from blink_actions.transfer.anchor import AnchorFetcher, RpcAnchorFetcher
from blink_actions.transfer.models import Anchor, TransferResult
from blink_actions.transfer.pipeline import Stage, TransferPipeline

__all__ = [
    "Anchor",
    "AnchorFetcher",
    "RpcAnchorFetcher",
    "Stage",
    "TransferPipeline",
    "TransferResult",
]
