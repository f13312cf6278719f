"""
Recent blockhash fetcher — the only network I/O of the transfer pipeline.

Responsibilities:
- Call getLatestBlockhash with commitment "confirmed" on the configured RPC.
- Bound each attempt with a timeout; optionally retry with exponential
  backoff and full jitter.
- Surface every failure (transport, timeout, RPC error, empty result) as
  UpstreamUnavailable.
"""

from __future__ import annotations

import asyncio
import random
from typing import Protocol

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed

from blink_actions.blink_logging import get_logger
from blink_actions.config.env import mask_rpc_url
from blink_actions.config.settings import Settings
from blink_actions.core.exceptions import UpstreamUnavailable
from blink_actions.transfer.models import Anchor

logger = get_logger(__name__)


class AnchorFetcher(Protocol):
    """Source of recent blockhashes. Implementations must be safe for concurrent calls."""

    async def fetch_anchor(self) -> Anchor:
        """Return a fresh anchor or raise UpstreamUnavailable."""
        ...


class RpcAnchorFetcher:
    """
    AnchorFetcher over solana-py's AsyncClient.

    One client handle is reused across requests; it holds no per-request state.
    """

    def __init__(
        self,
        rpc_url: str,
        *,
        commitment: Commitment = Confirmed,
        timeout_sec: float = 10.0,
        retries: int = 0,
        retry_base_delay_sec: float = 0.25,
        retry_max_delay_sec: float = 2.0,
        client: AsyncClient | None = None,
    ) -> None:
        """
        Args:
            rpc_url: Solana RPC HTTP endpoint.
            commitment: Commitment level for getLatestBlockhash.
            timeout_sec: Deadline per attempt; 0 disables the deadline.
            retries: Extra attempts after the first failure; 0 means a single attempt.
            retry_base_delay_sec: Backoff base; attempt n sleeps up to base * 2**n.
            retry_max_delay_sec: Cap for the backoff delay.
            client: Pre-built AsyncClient (tests); created from rpc_url when omitted.
        """
        if not rpc_url.strip():
            raise ValueError("rpc_url must be non-empty")
        if retries < 0:
            raise ValueError("retries must be >= 0")
        self._rpc_url = rpc_url
        self._commitment = commitment
        self._timeout_sec = timeout_sec
        self._retries = retries
        self._base_delay = retry_base_delay_sec
        self._max_delay = retry_max_delay_sec
        if client is None:
            if timeout_sec > 0:
                client = AsyncClient(rpc_url, commitment=commitment, timeout=timeout_sec)
            else:
                client = AsyncClient(rpc_url, commitment=commitment)
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "RpcAnchorFetcher":
        return cls(
            settings.rpc_url,
            timeout_sec=settings.anchor_timeout_sec,
            retries=settings.anchor_retries,
            retry_base_delay_sec=settings.anchor_retry_base_delay_sec,
            retry_max_delay_sec=settings.anchor_retry_max_delay_sec,
        )

    async def fetch_anchor(self) -> Anchor:
        attempts = self._retries + 1
        last_error = UpstreamUnavailable("no attempt made")
        for attempt in range(attempts):
            try:
                anchor = await self._fetch_once()
            except UpstreamUnavailable as e:
                last_error = e
            else:
                logger.debug(
                    "anchor_fetched",
                    blockhash=str(anchor.blockhash),
                    last_valid_block_height=anchor.last_valid_block_height,
                    attempt=attempt + 1,
                )
                return anchor
            if attempt + 1 < attempts:
                delay = self._backoff_delay(attempt)
                logger.warning(
                    "anchor_fetch_retry",
                    attempt=attempt + 1,
                    max_attempts=attempts,
                    delay_sec=round(delay, 3),
                    error=str(last_error),
                )
                await asyncio.sleep(delay)

        logger.error(
            "anchor_fetch_failed",
            rpc_url=mask_rpc_url(self._rpc_url),
            attempts=attempts,
            error=str(last_error),
        )
        raise last_error

    async def _fetch_once(self) -> Anchor:
        """One getLatestBlockhash call; raise UpstreamUnavailable on any failure."""
        try:
            call = self._client.get_latest_blockhash(self._commitment)
            if self._timeout_sec > 0:
                resp = await asyncio.wait_for(call, timeout=self._timeout_sec)
            else:
                resp = await call
        except asyncio.TimeoutError as e:
            raise UpstreamUnavailable(f"timed out after {self._timeout_sec}s") from e
        except Exception as e:
            raise UpstreamUnavailable(str(e) or type(e).__name__) from e

        value = getattr(resp, "value", None)
        if value is None or getattr(value, "blockhash", None) is None:
            raise UpstreamUnavailable("RPC returned no blockhash")
        return Anchor.from_rpc_value(value)

    def _backoff_delay(self, attempt: int) -> float:
        """Full jitter: uniform in [0, min(max, base * 2**attempt)]."""
        ceiling = min(self._max_delay, self._base_delay * (2**attempt))
        return random.uniform(0, ceiling)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()
