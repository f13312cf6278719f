"""
Main entrypoint: Solana Actions server for native SOL transfers.

Env: SOLANA_NETWORK, SOLANA_RPC_URL, API_HOST, API_PORT, ANCHOR_TIMEOUT_SEC,
ANCHOR_RETRIES, LOG_LEVEL, LOG_FORMAT.

Equivalent: uvicorn blink_actions.api_server.app:app --host 0.0.0.0 --port 8000
"""

import sys

# Default JSON logging until create_app applies LOG_LEVEL / LOG_FORMAT from settings
from blink_actions.blink_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Load settings, build the app, and serve it with uvicorn."""
    from blink_actions.config import get_settings

    try:
        settings = get_settings()
    except ValueError as e:
        logger.error("main_config_error", error=str(e))
        sys.exit(1)

    from blink_actions.api_server.server import create_app
    import uvicorn

    app = create_app(settings)
    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port, network=settings.network)
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
