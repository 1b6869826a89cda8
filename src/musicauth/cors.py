# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Credentialed CORS for the public endpoints."""

from __future__ import annotations

from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import Response

PRIVATE_PREFIX = "/private"
CORS_ALLOW_METHODS = ["GET", "POST", "OPTIONS"]
CORS_ALLOW_HEADERS = [
    "access-control-allow-credentials",
    "access-control-allow-origin",
    "content-type",
]


class PublicCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that skips ``/private`` and answers preflight with no body."""

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and scope["path"].startswith(PRIVATE_PREFIX):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)

    def preflight_response(self, request_headers) -> Response:
        response = super().preflight_response(request_headers=request_headers)
        if response.status_code != 200:
            return response
        headers = {
            k: v for k, v in response.headers.items() if k not in ("content-length", "content-type")
        }
        return Response(status_code=200, headers=headers)


def add_cors(app, origin: str) -> None:
    app.add_middleware(
        PublicCORSMiddleware,
        allow_origins=[origin],
        allow_credentials=True,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )
