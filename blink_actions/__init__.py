"""
Blink Actions — Solana Actions server for native SOL transfers.

Serves the action manifest and metadata a blink client needs, and builds
unsigned transfer transactions for the caller's wallet to sign. Modular
layout: config, logging, transfer pipeline, and API server.
"""

__version__ = "0.1.0"
