"""
Transfer instruction and unsigned transaction assembly.

Pure functions: no I/O, no signing. The caller's account is the only signer
and the fee payer; the transaction leaves here with an empty (all-zero)
signature slot for the caller's wallet to fill.
"""

from __future__ import annotations

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from blink_actions.transfer.models import Anchor


def new_receiver() -> Pubkey:
    """Public half of a fresh random keypair; the secret is dropped immediately."""
    return Keypair().pubkey()


def build_transfer_instruction(sender: Pubkey, receiver: Pubkey, lamports: int) -> Instruction:
    """System Program transfer of `lamports` from sender to receiver."""
    return transfer(
        TransferParams(from_pubkey=sender, to_pubkey=receiver, lamports=lamports)
    )


def build_transfer_transaction(
    sender: Pubkey,
    receiver: Pubkey,
    lamports: int,
    anchor: Anchor,
) -> Transaction:
    """One-instruction legacy transaction, fee payer = sender, bound to the anchor blockhash."""
    ix = build_transfer_instruction(sender, receiver, lamports)
    message = Message.new_with_blockhash([ix], sender, anchor.blockhash)
    return Transaction.new_unsigned(message)
