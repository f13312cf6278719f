"""
Structured logging for transfer requests.

Every line carries event_type, level, timestamp and logger. Inside
transfer_context() the request's truncated account and raw amount are merged
into every line from structlog contextvars, so concurrent requests never see
each other's fields.

Level and format come from Settings (LOG_LEVEL / LOG_FORMAT) through
configure_structlog(); this module reads no environment itself and imports
nothing from blink_actions.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

import structlog

LOG_FORMATS = ("json", "console")
ACCOUNT_PREFIX_LEN = 8
AMOUNT_MAX_LEN = 32


def resolve_level(level: int | str) -> int:
    """Map "info" / "WARNING" / 20 to a stdlib logging level number."""
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).strip().upper(), None)
    if not isinstance(value, int):
        raise ValueError(f"unknown log level {level!r}")
    return value


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog's 'event' becomes event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_structlog(level: int | str = "INFO", fmt: str = "json") -> None:
    """
    (Re)configure structlog for the process.

    Called at import with defaults and again by the app factory with the
    service settings. Output goes to the current sys.stdout.
    """
    fmt = fmt.strip().lower()
    if fmt not in LOG_FORMATS:
        raise ValueError(f"log format must be one of {LOG_FORMATS}, got {fmt!r}")
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        # module-level loggers must pick up the settings applied by create_app
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("transfer_built", lamports=1_000_000_000)
    Output (JSON): {"event_type": "transfer_built", "lamports": 1000000000,
    "account": "7NtY4xXg...", "amount": "1", "level": "info", "timestamp": "...",
    "logger": "blink_actions.transfer.pipeline"}
    """
    return structlog.get_logger(name).bind(logger=name)


def short_account(account: Any) -> str:
    text = account if isinstance(account, str) else repr(account)
    if len(text) > ACCOUNT_PREFIX_LEN:
        return text[:ACCOUNT_PREFIX_LEN] + "..."
    return text


@contextmanager
def transfer_context(account: Any, amount: Any) -> Iterator[None]:
    """Bind the request's account (truncated) and amount to every log line in the block."""
    amount_text = "" if amount is None else str(amount)
    if len(amount_text) > AMOUNT_MAX_LEN:
        amount_text = amount_text[:AMOUNT_MAX_LEN] + "..."
    with structlog.contextvars.bound_contextvars(
        account=short_account(account),
        amount=amount_text,
    ):
        yield
