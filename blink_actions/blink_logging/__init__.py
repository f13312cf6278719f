"""
Structured logging for Blink Actions.

JSON logs with timestamp, event_type, and request-scoped fields (account,
amount) bound through structlog contextvars. Use get_logger() in all modules.
"""

from blink_actions.blink_logging.logger import (
    configure_structlog,
    get_logger,
    resolve_level,
    short_account,
    transfer_context,
)

__all__ = ["configure_structlog", "get_logger", "resolve_level", "short_account", "transfer_context"]
