# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request id and access logging middleware."""

from __future__ import annotations

import logging
import time
import uuid
from http import HTTPStatus

from starlette.middleware.base import BaseHTTPMiddleware

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

log = logging.getLogger("musicauth.http")


def configure_logging(level: str = "info") -> None:
    root = logging.getLogger("musicauth")
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def _reason(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        remote = request.client.host if request.client else "-"
        request_id = getattr(request.state, "request_id", None)
        path = request.url.path
        if request.url.query:
            path += "?" + request.url.query
        log.info("started %s %s remote_addr=%s request_id=%s", request.method, path, remote, request_id)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        log.info(
            "completed with %d %s in %.2fms request_id=%s",
            response.status_code,
            _reason(response.status_code),
            elapsed_ms,
            request_id,
        )
        return response
