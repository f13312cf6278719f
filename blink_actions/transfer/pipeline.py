"""
Transfer request orchestration.

Runs the stages in order and stops at the first failure:

    VALIDATING_IDENTITY -> VALIDATING_AMOUNT -> FETCHING_ANCHOR
        -> BUILDING_INSTRUCTION -> ENCODING -> DONE

Any stage may end in FAILED; the failure line records stage="failed" and the
stage that failed as failed_stage. Validation happens before the anchor fetch, so
bad input never costs an RPC call. Failures are ActionError subclasses; the
API server maps them to HTTP responses.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from solders.pubkey import Pubkey

from blink_actions.blink_logging import get_logger, transfer_context
from blink_actions.config.settings import Settings
from blink_actions.core.exceptions import ActionError, EncodingFailure
from blink_actions.transfer.amount import format_amount, resolve_amount
from blink_actions.transfer.anchor import AnchorFetcher
from blink_actions.transfer.builder import build_transfer_transaction, new_receiver
from blink_actions.transfer.encoder import encode_transaction
from blink_actions.transfer.models import TransferResult
from blink_actions.utils.wallet_utils import parse_address

CURRENCY_UNIT = "SOL"

logger = get_logger(__name__)


class Stage(str, Enum):
    VALIDATING_IDENTITY = "validating_identity"
    VALIDATING_AMOUNT = "validating_amount"
    FETCHING_ANCHOR = "fetching_anchor"
    BUILDING_INSTRUCTION = "building_instruction"
    ENCODING = "encoding"
    DONE = "done"
    FAILED = "failed"


class TransferPipeline:
    """
    Builds one unsigned SOL transfer per call to run().

    Holds no per-request state; one instance serves concurrent requests.
    """

    def __init__(
        self,
        settings: Settings,
        anchor_fetcher: AnchorFetcher,
        *,
        receiver_factory: Callable[[], Pubkey] = new_receiver,
    ) -> None:
        self._settings = settings
        self._anchor_fetcher = anchor_fetcher
        self._receiver_factory = receiver_factory

    @property
    def settings(self) -> Settings:
        return self._settings

    async def run(
        self,
        account: Any,
        amount: Any,
        receiver: Any = None,
    ) -> TransferResult:
        """
        Validate inputs, fetch a blockhash, build and encode the transaction.

        Args:
            account: Caller's base58 address (fee payer and sender).
            amount: SOL amount as query text or number.
            receiver: Optional base58 destination; a random one is generated when None.

        Raises:
            InvalidAddress, InvalidAmount, UpstreamUnavailable, EncodingFailure.
        """
        with transfer_context(account, amount):
            return await self._run(account, amount, receiver)

    async def _run(self, account: Any, amount: Any, receiver: Any) -> TransferResult:
        stage = Stage.VALIDATING_IDENTITY
        try:
            logger.debug("transfer_stage", stage=stage.value)
            sender = parse_address(account, "account")
            to_pubkey = (
                parse_address(receiver, "to") if receiver is not None else self._receiver_factory()
            )

            stage = Stage.VALIDATING_AMOUNT
            logger.debug("transfer_stage", stage=stage.value)
            amount_sol, lamports = resolve_amount(amount)

            stage = Stage.FETCHING_ANCHOR
            logger.debug("transfer_stage", stage=stage.value)
            anchor = await self._anchor_fetcher.fetch_anchor()

            stage = Stage.BUILDING_INSTRUCTION
            logger.debug("transfer_stage", stage=stage.value)
            tx = build_transfer_transaction(sender, to_pubkey, lamports, anchor)

            stage = Stage.ENCODING
            logger.debug("transfer_stage", stage=stage.value)
            encoded = encode_transaction(tx)
        except ActionError as e:
            logger.warning(
                "transfer_failed",
                stage=Stage.FAILED.value,
                failed_stage=stage.value,
                kind=e.kind,
                status_code=e.status_code,
                error=e.message,
            )
            raise
        except Exception as e:
            # Builder and encoder cannot fail on validated input; anything here is a defect.
            logger.exception(
                "transfer_failed",
                stage=Stage.FAILED.value,
                failed_stage=stage.value,
                kind=EncodingFailure.kind,
            )
            raise EncodingFailure(f"{stage.value}: {e}") from e

        stage = Stage.DONE
        message = f"Send {format_amount(amount_sol)} {CURRENCY_UNIT} to {to_pubkey}"
        logger.info(
            "transfer_built",
            stage=stage.value,
            lamports=lamports,
            receiver=str(to_pubkey),
            blockhash=str(anchor.blockhash),
        )
        return TransferResult(
            transaction=encoded,
            message=message,
            sender=sender,
            receiver=to_pubkey,
            lamports=lamports,
            anchor=anchor,
        )
