"""
API server package — Solana Actions HTTP interface.

Serves the actions.json manifest, action metadata, and unsigned transfer
transactions built by the transfer pipeline.
"""
