"""
Tests for environment-driven settings (get_settings / Settings).
"""

from __future__ import annotations

import pytest

from blink_actions.config.env import (
    DEVNET_RPC_URL,
    MAINNET_RPC_URL,
    TESTNET_RPC_URL,
    mask_rpc_url,
)
from blink_actions.config.settings import Settings, get_settings

_ENV_VARS = (
    "SOLANA_NETWORK",
    "SOLANA_CLUSTER",
    "SOLANA_RPC_URL",
    "API_HOST",
    "API_PORT",
    "ACTIONS_BASE_URL",
    "ACTIONS_ICON_PATH",
    "ANCHOR_TIMEOUT_SEC",
    "ANCHOR_RETRIES",
    "ANCHOR_RETRY_BASE_DELAY_SEC",
    "ANCHOR_RETRY_MAX_DELAY_SEC",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = get_settings()
    assert s.network == "devnet"
    assert s.rpc_url == DEVNET_RPC_URL
    assert s.api_host == "0.0.0.0"
    assert s.api_port == 8000
    assert s.base_url is None
    assert s.anchor_retries == 0
    assert s.anchor_timeout_sec == 10.0
    assert s.blockchain_id == "solana:EtWTRABZaYq6iMfeYKouRu166VU2xqa1"
    assert s.log_level == "INFO"
    assert s.log_format == "json"


@pytest.mark.parametrize(
    "network, expected_network, expected_url",
    [
        ("mainnet", "mainnet", MAINNET_RPC_URL),
        ("mainnet-beta", "mainnet", MAINNET_RPC_URL),
        ("testnet", "testnet", TESTNET_RPC_URL),
        ("bogus", "devnet", DEVNET_RPC_URL),
    ],
)
def test_network_selects_rpc(clean_env, network, expected_network, expected_url):
    clean_env.setenv("SOLANA_NETWORK", network)
    s = get_settings()
    assert s.network == expected_network
    assert s.rpc_url == expected_url


def test_explicit_values(clean_env):
    clean_env.setenv("SOLANA_RPC_URL", "https://rpc.example.com/?api-key=secret")
    clean_env.setenv("API_PORT", "3000")
    clean_env.setenv("ACTIONS_BASE_URL", "https://actions.example.com/")
    clean_env.setenv("ANCHOR_TIMEOUT_SEC", "2.5")
    clean_env.setenv("ANCHOR_RETRIES", "3")
    clean_env.setenv("LOG_LEVEL", "debug")
    clean_env.setenv("LOG_FORMAT", " Console ")
    s = get_settings()
    assert s.rpc_url == "https://rpc.example.com/?api-key=secret"
    assert s.api_port == 3000
    assert s.base_url == "https://actions.example.com"
    assert s.anchor_timeout_sec == 2.5
    assert s.anchor_retries == 3
    assert s.log_level == "DEBUG"
    assert s.log_format == "console"


def test_bad_numbers_raise(clean_env):
    clean_env.setenv("ANCHOR_RETRIES", "many")
    with pytest.raises(ValueError, match="ANCHOR_RETRIES"):
        get_settings()


def test_settings_validation():
    with pytest.raises(ValueError, match="rpc_url"):
        Settings(rpc_url=" ")
    with pytest.raises(ValueError, match="anchor_retries"):
        Settings(anchor_retries=-1)
    with pytest.raises(ValueError, match="anchor_timeout_sec"):
        Settings(anchor_timeout_sec=-1)
    with pytest.raises(ValueError, match="log_level"):
        Settings(log_level="chatty")
    with pytest.raises(ValueError, match="log_format"):
        Settings(log_format="xml")


def test_mask_rpc_url():
    assert mask_rpc_url("https://rpc.example.com/?api-key=secret") == "https://rpc.example.com/?api-key=***"
    assert mask_rpc_url(DEVNET_RPC_URL) == DEVNET_RPC_URL
