"""
Application-level exceptions.

Every failure of the transfer pipeline is one of these. Each carries the HTTP
status it maps to and the message shown to the caller in {"error": ...}.
"""

from __future__ import annotations


class ActionError(Exception):
    """Base class: a failure that terminates an action request."""

    status_code: int = 500
    kind: str = "ActionError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        """Message safe to return to the caller."""
        return self.message


class InvalidAddress(ActionError):
    """Account (or receiver) is not a base58 encoding of 32 bytes."""

    status_code = 400
    kind = "InvalidAddress"


class InvalidAmount(ActionError):
    """Amount is missing, non-numeric, negative, non-finite, or overflows u64 lamports."""

    status_code = 400
    kind = "InvalidAmount"


class UpstreamUnavailable(ActionError):
    """Solana RPC unreachable, timed out, or returned an error."""

    status_code = 500
    kind = "UpstreamUnavailable"

    @property
    def public_message(self) -> str:
        return f"Failed to get recent blockhash: {self.message}"


class EncodingFailure(ActionError):
    """Internal defect while building or serializing the transaction."""

    status_code = 500
    kind = "EncodingFailure"

    @property
    def public_message(self) -> str:
        return "Error preparing transaction"
