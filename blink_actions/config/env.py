"""
Environment variable loading for Blink Actions.

- SOLANA_NETWORK: devnet | testnet | mainnet (default: devnet)
- SOLANA_RPC_URL: RPC endpoint (falls back to the public endpoint of the network)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is blink_actions/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEVNET_RPC_URL = "https://api.devnet.solana.com"
TESTNET_RPC_URL = "https://api.testnet.solana.com"
MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"

# CAIP-2 chain ids, sent in X-Blockchain-Ids
BLOCKCHAIN_IDS = {
    "mainnet": "solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp",
    "devnet": "solana:EtWTRABZaYq6iMfeYKouRu166VU2xqa1",
    "testnet": "solana:4uhcVJyU9pJkvQyS88uRDiswHXSCkY3z",
}

_DEFAULT_RPC_URLS = {
    "devnet": DEVNET_RPC_URL,
    "testnet": TESTNET_RPC_URL,
    "mainnet": MAINNET_RPC_URL,
}


def load_actions_env() -> None:
    """Load .env from project root. Does not override variables already set."""
    load_dotenv(_ENV_PATH, override=False)


def get_solana_network() -> str:
    """
    Return SOLANA_NETWORK from env: devnet | testnet | mainnet.
    Unknown values fall back to devnet.
    """
    load_actions_env()
    raw = (os.getenv("SOLANA_NETWORK") or os.getenv("SOLANA_CLUSTER") or "devnet").strip().lower()
    if raw in ("mainnet", "mainnet-beta"):
        return "mainnet"
    if raw == "testnet":
        return "testnet"
    return "devnet"


def get_solana_rpc_url() -> str:
    """
    Resolve Solana RPC URL from env.
    Order: SOLANA_RPC_URL > public endpoint for SOLANA_NETWORK.
    """
    load_actions_env()
    url = (os.getenv("SOLANA_RPC_URL") or "").strip()
    if url:
        return url
    return _DEFAULT_RPC_URLS[get_solana_network()]


def get_blockchain_id(network: str) -> str:
    return BLOCKCHAIN_IDS.get(network, BLOCKCHAIN_IDS["devnet"])


def mask_rpc_url(url: str) -> str:
    """Hide API keys carried in the RPC URL query string."""
    if "api-key=" in url:
        return url.split("api-key=")[0] + "api-key=***"
    return url
