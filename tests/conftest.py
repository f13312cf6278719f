"""
Pytest fixtures for Blink Actions tests. The blockhash source is faked so no test touches Solana RPC.
"""

from __future__ import annotations

import pytest
from solders.hash import Hash
from solders.pubkey import Pubkey

from blink_actions.config.settings import Settings
from blink_actions.core.exceptions import UpstreamUnavailable
from blink_actions.transfer.models import Anchor

SENDER = Pubkey.from_bytes(bytes([7] * 32))
RECEIVER = Pubkey.from_bytes(bytes([42] * 32))
FIXED_BLOCKHASH = Hash(bytes([9] * 32))
FIXED_ANCHOR = Anchor(blockhash=FIXED_BLOCKHASH, last_valid_block_height=1_000)


class FakeAnchorFetcher:
    """AnchorFetcher returning a fixed anchor (or raising) and counting calls."""

    def __init__(self, anchor: Anchor = FIXED_ANCHOR, error: Exception | None = None) -> None:
        self.anchor = anchor
        self.error = error
        self.calls = 0

    async def fetch_anchor(self) -> Anchor:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.anchor


@pytest.fixture
def settings() -> Settings:
    return Settings(rpc_url="http://rpc.invalid", network="devnet")


@pytest.fixture
def fake_fetcher() -> FakeAnchorFetcher:
    return FakeAnchorFetcher()


@pytest.fixture
def failing_fetcher() -> FakeAnchorFetcher:
    return FakeAnchorFetcher(error=UpstreamUnavailable("connection refused"))


@pytest.fixture
def client(settings, fake_fetcher):
    """FastAPI TestClient over an app whose blockhash fetch and receiver are fixed."""
    from fastapi.testclient import TestClient

    from blink_actions.api_server.server import create_app

    app = create_app(settings, anchor_fetcher=fake_fetcher, receiver_factory=lambda: RECEIVER)
    return TestClient(app)


@pytest.fixture
def failing_client(settings, failing_fetcher):
    from fastapi.testclient import TestClient

    from blink_actions.api_server.server import create_app

    app = create_app(settings, anchor_fetcher=failing_fetcher, receiver_factory=lambda: RECEIVER)
    return TestClient(app)
