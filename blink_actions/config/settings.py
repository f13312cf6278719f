"""
Application settings.

Responsibilities:
- Build one immutable Settings object from environment variables and .env.
- Provide defaults for everything; the service runs with no configuration
  against Solana devnet.
- Settings is passed explicitly into the app factory and the transfer
  pipeline; core modules never read the environment themselves.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from blink_actions.blink_logging.logger import LOG_FORMATS, resolve_level
from blink_actions.config.env import (
    get_blockchain_id,
    get_solana_network,
    get_solana_rpc_url,
    load_actions_env,
)

ACTION_VERSION = "2.4"


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    """Service configuration. Timeout / retry values of 0 disable the feature."""

    rpc_url: str = "https://api.devnet.solana.com"
    network: str = "devnet"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    base_url: str | None = None
    icon_path: str = "/solana_devs.jpg"
    anchor_timeout_sec: float = 10.0
    anchor_retries: int = 0
    anchor_retry_base_delay_sec: float = 0.25
    anchor_retry_max_delay_sec: float = 2.0
    action_version: str = ACTION_VERSION
    log_level: str = "INFO"
    log_format: str = "json"

    def __post_init__(self) -> None:
        if not self.rpc_url.strip():
            raise ValueError("rpc_url must be non-empty")
        if self.anchor_timeout_sec < 0:
            raise ValueError("anchor_timeout_sec must be >= 0")
        if self.anchor_retries < 0:
            raise ValueError("anchor_retries must be >= 0")
        if self.anchor_retry_base_delay_sec < 0 or self.anchor_retry_max_delay_sec < 0:
            raise ValueError("anchor retry delays must be >= 0")
        try:
            resolve_level(self.log_level)
        except ValueError as e:
            raise ValueError(f"log_level: {e}") from e
        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {LOG_FORMATS}")

    @property
    def blockchain_id(self) -> str:
        """CAIP-2 id of the configured cluster."""
        return get_blockchain_id(self.network)


def get_settings() -> Settings:
    """
    Return settings built from the current environment.

    Env: SOLANA_NETWORK, SOLANA_RPC_URL, API_HOST, API_PORT, ACTIONS_BASE_URL,
    ACTIONS_ICON_PATH, ANCHOR_TIMEOUT_SEC, ANCHOR_RETRIES,
    ANCHOR_RETRY_BASE_DELAY_SEC, ANCHOR_RETRY_MAX_DELAY_SEC, LOG_LEVEL, LOG_FORMAT.
    """
    load_actions_env()
    base_url = (os.getenv("ACTIONS_BASE_URL") or "").strip().rstrip("/") or None
    return Settings(
        rpc_url=get_solana_rpc_url(),
        network=get_solana_network(),
        api_host=(os.getenv("API_HOST") or "0.0.0.0").strip(),
        api_port=_env_int("API_PORT", 8000),
        base_url=base_url,
        icon_path=(os.getenv("ACTIONS_ICON_PATH") or "/solana_devs.jpg").strip(),
        anchor_timeout_sec=_env_float("ANCHOR_TIMEOUT_SEC", 10.0),
        anchor_retries=_env_int("ANCHOR_RETRIES", 0),
        anchor_retry_base_delay_sec=_env_float("ANCHOR_RETRY_BASE_DELAY_SEC", 0.25),
        anchor_retry_max_delay_sec=_env_float("ANCHOR_RETRY_MAX_DELAY_SEC", 2.0),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        log_format=(os.getenv("LOG_FORMAT") or "json").strip().lower(),
    )
