"""
FastAPI server — Solana Actions endpoints for native SOL transfers.

Exposes GET /actions.json, GET /api/actions/transfer-sol (metadata) and
GET|POST /api/actions/transfer-sol?amount=... (unsigned transaction).
Errors are always {"error": "<message>"}.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError
from solders.pubkey import Pubkey
from starlette.exceptions import HTTPException

from blink_actions import __version__
from blink_actions.api_server.actions import (
    TRANSFER_SOL_PATH,
    actions_manifest,
    transfer_sol_metadata,
)
from blink_actions.api_server.middleware import install_middleware
from blink_actions.blink_logging import configure_structlog, get_logger
from blink_actions.config.env import mask_rpc_url
from blink_actions.config.settings import Settings, get_settings
from blink_actions.core.exceptions import ActionError, InvalidAddress
from blink_actions.transfer.anchor import AnchorFetcher, RpcAnchorFetcher
from blink_actions.transfer.builder import new_receiver
from blink_actions.transfer.pipeline import TransferPipeline

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Request / response models
# -----------------------------------------------------------------------------

class ActionPostRequest(BaseModel):
    """POST body: the wallet that will sign and pay for the transaction."""

    account: str = Field(..., max_length=64, description="Signer / fee payer address (base58)")


class ActionPostResponse(BaseModel):
    transaction: str = Field(..., description="Unsigned transaction, base64 (standard, padded)")
    message: str = Field("", description="Human-readable summary")


class ActionErrorResponse(BaseModel):
    error: str


def _parse_post_body(raw: bytes) -> ActionPostRequest:
    """Decode {"account": "..."}; malformed bodies are an invalid account."""
    try:
        return ActionPostRequest.model_validate_json(raw or b"{}")
    except ValidationError as e:
        raise InvalidAddress("Error decoding payload: expected JSON body with string 'account'") from e


def _request_origin(request: Request, settings: Settings) -> str:
    if settings.base_url:
        return settings.base_url
    return f"{request.url.scheme}://{request.url.netloc}"


# -----------------------------------------------------------------------------
# App factory
# -----------------------------------------------------------------------------

def create_app(
    settings: Settings | None = None,
    *,
    anchor_fetcher: AnchorFetcher | None = None,
    receiver_factory: Callable[[], Pubkey] = new_receiver,
) -> FastAPI:
    """
    Build the ASGI app.

    Args:
        settings: Service configuration; read from env when omitted.
        anchor_fetcher: Blockhash source; an RpcAnchorFetcher over settings.rpc_url
            is created (and closed on shutdown) when omitted.
        receiver_factory: Destination generator used when the request has no `to`.
    """
    settings = settings or get_settings()
    configure_structlog(settings.log_level, settings.log_format)
    owned_fetcher: RpcAnchorFetcher | None = None
    if anchor_fetcher is None:
        owned_fetcher = RpcAnchorFetcher.from_settings(settings)
        anchor_fetcher = owned_fetcher
    pipeline = TransferPipeline(settings, anchor_fetcher, receiver_factory=receiver_factory)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "actions_server_started",
            network=settings.network,
            rpc_url=mask_rpc_url(settings.rpc_url),
        )
        yield
        if owned_fetcher is not None:
            await owned_fetcher.aclose()
        logger.info("actions_server_stopped")

    app = FastAPI(
        title="Blink Actions API",
        description="Solana Actions server: unsigned native SOL transfer transactions.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.pipeline = pipeline
    install_middleware(app, settings)

    @app.exception_handler(ActionError)
    async def action_error_handler(request: Request, exc: ActionError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("actions_request_failed", path=request.url.path, kind=exc.kind, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Consistent JSON error response for HTTPException."""
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.get("/actions.json")
    async def get_actions_json() -> dict[str, Any]:
        return actions_manifest()

    @app.api_route(
        TRANSFER_SOL_PATH,
        methods=["GET", "POST"],
        responses={400: {"model": ActionErrorResponse}, 500: {"model": ActionErrorResponse}},
    )
    async def transfer_sol(request: Request) -> dict[str, Any]:
        """
        GET without a body: action metadata.
        GET/POST with {"account": ...}: unsigned transfer of `amount` SOL.
        """
        raw = await request.body()
        if request.method == "GET" and not raw.strip():
            return transfer_sol_metadata(_request_origin(request, settings), settings.icon_path)

        body = _parse_post_body(raw)
        result = await request.app.state.pipeline.run(
            body.account,
            request.query_params.get("amount"),
            request.query_params.get("to"),
        )
        return ActionPostResponse(**result.to_response()).model_dump()

    @app.get("/health")
    def health() -> dict[str, str]:
        """Liveness check: API is up."""
        return {"status": "ok"}

    return app
