"""
HTTP middleware — CORS and Solana Actions headers.

Responsibilities:
- Permissive CORS for a publicly embeddable action (all origins).
- X-Action-Version / X-Blockchain-Ids on every response.
- Answer bare OPTIONS requests (no CORS preflight headers) with 200.
"""

from __future__ import annotations

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from blink_actions.config.settings import Settings

ALLOWED_METHODS = ["GET", "POST", "PUT", "OPTIONS"]
ALLOWED_HEADERS = [
    "Content-Type",
    "Authorization",
    "Content-Encoding",
    "Accept-Encoding",
    "X-Accept-Action-Version",
    "X-Accept-Blockchain-Ids",
]
EXPOSED_HEADERS = ["X-Action-Version", "X-Blockchain-Ids"]


class ActionHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, *, action_version: str, blockchain_id: str) -> None:
        super().__init__(app)
        self._action_version = action_version
        self._blockchain_id = blockchain_id

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            response: Response = JSONResponse(content=None)
        else:
            response = await call_next(request)
        response.headers.setdefault("X-Action-Version", self._action_version)
        response.headers.setdefault("X-Blockchain-Ids", self._blockchain_id)
        return response


def install_middleware(app: FastAPI, settings: Settings) -> None:
    """Register action headers (inner) and CORS (outer, answers preflights first)."""
    app.add_middleware(
        ActionHeadersMiddleware,
        action_version=settings.action_version,
        blockchain_id=settings.blockchain_id,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        expose_headers=EXPOSED_HEADERS,
    )
