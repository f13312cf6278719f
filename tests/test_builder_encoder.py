"""
Tests for transfer transaction assembly and wire encoding.

Round-trips through base64 and Transaction.from_bytes to check the structure
a wallet will see: one System Program transfer, fee payer = sender, empty
signature slot, anchor blockhash.
"""

from __future__ import annotations

import base64
import struct

import pytest
from solders.hash import Hash
from solders.message import Message
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from solders.transaction import Transaction

from blink_actions.core.exceptions import EncodingFailure
from blink_actions.transfer.builder import (
    build_transfer_instruction,
    build_transfer_transaction,
    new_receiver,
)
from blink_actions.transfer.encoder import (
    decode_transaction,
    encode_transaction,
    serialize_transaction,
)
from blink_actions.transfer.models import Anchor

from conftest import FIXED_ANCHOR, FIXED_BLOCKHASH, RECEIVER, SENDER

# System Program instruction index for Transfer
TRANSFER_INDEX = 2


def _transfer_lamports(tx: Transaction) -> int:
    ix = tx.message.instructions[0]
    index, lamports = struct.unpack("<IQ", bytes(ix.data))
    assert index == TRANSFER_INDEX
    return lamports


def test_instruction_targets_system_program():
    ix = build_transfer_instruction(SENDER, RECEIVER, 5)
    assert ix.program_id == SYSTEM_PROGRAM_ID
    assert [a.pubkey for a in ix.accounts] == [SENDER, RECEIVER]
    assert ix.accounts[0].is_signer is True
    assert ix.accounts[0].is_writable is True
    assert ix.accounts[1].is_signer is False
    assert ix.accounts[1].is_writable is True


def test_round_trip_structure():
    tx = build_transfer_transaction(SENDER, RECEIVER, 1_000_000_000, FIXED_ANCHOR)
    decoded = decode_transaction(encode_transaction(tx))

    message = decoded.message
    assert len(message.instructions) == 1
    assert message.account_keys[0] == SENDER  # fee payer
    assert RECEIVER in message.account_keys
    assert message.account_keys[message.instructions[0].program_id_index] == SYSTEM_PROGRAM_ID
    assert message.recent_blockhash == FIXED_BLOCKHASH
    assert message.header.num_required_signatures == 1
    assert decoded.signatures == [Signature.default()]
    assert _transfer_lamports(decoded) == 1_000_000_000
    assert decoded == tx


def test_zero_lamport_transfer():
    tx = build_transfer_transaction(SENDER, RECEIVER, 0, FIXED_ANCHOR)
    assert _transfer_lamports(decode_transaction(encode_transaction(tx))) == 0


def test_wire_bytes_start_with_one_empty_signature():
    raw = serialize_transaction(build_transfer_transaction(SENDER, RECEIVER, 1, FIXED_ANCHOR))
    # shortvec signature count, then one 64-byte zero signature
    assert raw[0] == 1
    assert raw[1:65] == bytes(64)


def test_encoding_is_standard_padded_base64():
    encoded = encode_transaction(build_transfer_transaction(SENDER, RECEIVER, 7, FIXED_ANCHOR))
    raw = base64.b64decode(encoded, validate=True)
    assert base64.b64encode(raw).decode("ascii") == encoded
    assert len(encoded) % 4 == 0


def test_encoding_is_deterministic():
    a = encode_transaction(build_transfer_transaction(SENDER, RECEIVER, 123, FIXED_ANCHOR))
    b = encode_transaction(build_transfer_transaction(SENDER, RECEIVER, 123, FIXED_ANCHOR))
    assert a == b


def test_blockhash_changes_encoding():
    other = Anchor(blockhash=Hash(bytes([1] * 32)))
    a = encode_transaction(build_transfer_transaction(SENDER, RECEIVER, 1, FIXED_ANCHOR))
    b = encode_transaction(build_transfer_transaction(SENDER, RECEIVER, 1, other))
    assert a != b


def test_new_receiver_is_random():
    first, second = new_receiver(), new_receiver()
    assert isinstance(first, Pubkey)
    assert first != second


def test_encoder_rejects_empty_transaction():
    tx = Transaction.new_unsigned(Message.new_with_blockhash([], SENDER, FIXED_BLOCKHASH))
    with pytest.raises(EncodingFailure, match="no instructions"):
        encode_transaction(tx)


def test_encoder_rejects_extra_signers():
    # transfer from RECEIVER while SENDER pays fees: two signatures required
    ix = build_transfer_instruction(RECEIVER, SENDER, 1)
    tx = Transaction.new_unsigned(Message.new_with_blockhash([ix], SENDER, FIXED_BLOCKHASH))
    with pytest.raises(EncodingFailure, match="exactly 1 required signature"):
        encode_transaction(tx)


def test_encoding_failure_hides_detail():
    err = EncodingFailure("serialization failed: boom")
    assert err.status_code == 500
    assert "boom" not in err.public_message


def test_decode_rejects_bad_base64():
    with pytest.raises(ValueError, match="base64"):
        decode_transaction("not base64!!")
