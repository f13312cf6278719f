"""
Configuration management for Blink Actions.

Loads settings from environment variables and an optional .env file and
exposes them as a single immutable Settings object.
"""

from blink_actions.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
