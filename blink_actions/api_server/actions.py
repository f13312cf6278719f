"""
Static and templated Solana Actions payloads.

- actions.json rules mapping website paths to action API paths.
- GET metadata for the transfer-sol action: title, icon, description and
  linked actions (preset amounts plus one free-form amount).
"""

from __future__ import annotations

from typing import Any

TRANSFER_SOL_PATH = "/api/actions/transfer-sol"
PRESET_AMOUNTS = (1, 5, 10)

ACTIONS_JSON_RULES: list[dict[str, str]] = [
    # map all root level routes to an action
    {"pathPattern": "/*", "apiPath": "/api/actions/*"},
    # idempotent rule as the fallback
    {"pathPattern": "/api/actions/**", "apiPath": "/api/actions/**"},
]


def actions_manifest() -> dict[str, Any]:
    return {"rules": [dict(rule) for rule in ACTIONS_JSON_RULES]}


def transfer_sol_metadata(origin: str, icon_path: str = "/solana_devs.jpg") -> dict[str, Any]:
    """
    Action GET response for transfer-sol.

    `origin` is the scheme://host the icon is served from (no trailing slash).
    """
    base_href = f"{TRANSFER_SOL_PATH}?"
    icon = icon_path if icon_path.startswith(("http://", "https://")) else f"{origin}{icon_path}"
    actions: list[dict[str, Any]] = [
        {"label": f"Send {amount} SOL", "href": f"{base_href}amount={amount}"}
        for amount in PRESET_AMOUNTS
    ]
    actions.append(
        {
            "label": "Send SOL",
            "href": f"{base_href}amount={{amount}}",
            "parameters": [
                {
                    "name": "amount",
                    "label": "Enter the amount of SOL to send",
                    "required": True,
                },
            ],
        }
    )
    return {
        "type": "action",
        "title": "Actions Example - Transfer Native SOL",
        "icon": icon,
        "description": "Transfer SOL to another Solana wallet",
        "label": "Transfer",
        "links": {"actions": actions},
    }
