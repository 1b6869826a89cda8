# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, FastAPI, Path, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, StrictStr

from musicauth.auth.session import SessionManager
from musicauth.core.models import User
from musicauth.errors import (
    AuthServiceError,
    InternalError,
    MalformedRequestError,
    NotFoundError,
    SessionError,
    Unauthorized,
)
from musicauth.cors import PRIVATE_PREFIX, add_cors
from musicauth.infra.store import Store
from musicauth.logs import RequestIdMiddleware, RequestLoggingMiddleware
from musicauth.permissions import get_sessions, get_store, require_user

log = logging.getLogger(__name__)

INCORRECT_LOGIN_OR_PASSWORD = "incorrect login or password"
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

router = APIRouter()
private = APIRouter(prefix=PRIVATE_PREFIX)


class CreateUserRequest(BaseModel):
    login: StrictStr = ""
    password: StrictStr = ""
    stage_name: StrictStr = ""


class CreateSessionRequest(BaseModel):
    login: StrictStr = ""
    password: StrictStr = ""


class UpdateCookieRequest(BaseModel):
    login: StrictStr = ""
    auth_cookie: StrictStr = ""


class CheckCookieRequest(BaseModel):
    auth_cookie: StrictStr = ""


def create_app(store: Store, sessions: SessionManager, *, cors_origin: str = "http://localhost") -> FastAPI:
    app = FastAPI(title="musicauth")
    app.state.store = store
    app.state.sessions = sessions

    add_cors(app, cors_origin)
    # Added last, so outermost: the request id exists before anything logs.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(AuthServiceError, _service_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.include_router(router)
    app.include_router(private)
    return app


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def _service_error_handler(request: Request, exc: AuthServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error(
            "request_id=%s %s: %r",
            getattr(request.state, "request_id", None),
            type(exc).__name__,
            exc.__cause__ or exc,
        )
        return _error(exc.status_code, InternalError.message)
    return _error(exc.status_code, exc.message)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors and errors[0].get("loc", ("",))[0] == "path":
        return _error(400, "invalid id")
    return _error(400, MalformedRequestError.message)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error(
        "request_id=%s unhandled %s",
        getattr(request.state, "request_id", None),
        type(exc).__name__,
        exc_info=exc,
    )
    return _error(500, InternalError.message)


# ------------------ Preflight ------------------


@router.options("/users")
@router.options("/sessions")
@router.options("/updateCookie")
@router.options("/checkCookie")
@router.options("/users/{user_id}")
def preflight() -> Response:
    return Response(status_code=200)


# ------------------ Routes ------------------


@router.post("/users")
def create_user(body: CreateUserRequest, store: Store = Depends(get_store)):
    u = User(login=body.login, password=body.password, stage_name=body.stage_name)
    store.user.create(u)
    u.sanitize()
    return JSONResponse(u.to_dict(), status_code=201)


@router.post("/sessions")
def create_session(
    request: Request,
    body: CreateSessionRequest,
    store: Store = Depends(get_store),
    sessions: SessionManager = Depends(get_sessions),
):
    try:
        u = store.user.find_by_login(body.login)
    except NotFoundError:
        u = None
    if u is None or not u.compare_password(body.password):
        raise Unauthorized(INCORRECT_LOGIN_OR_PASSWORD)

    try:
        session = sessions.get(request)
    except SessionError as e:
        raise InternalError() from e
    session["user_id"] = u.id

    resp = JSONResponse(u.id, status_code=200)
    sessions.save(resp, session)
    return resp


@router.post("/updateCookie")
def update_cookie(body: UpdateCookieRequest, store: Store = Depends(get_store)):
    try:
        store.user.update_cookie(body.login, body.auth_cookie)
    except NotFoundError as e:
        raise InternalError(f"no user with login {body.login!r}") from e
    return Response(status_code=200)


@router.post("/checkCookie")
def check_cookie(body: CheckCookieRequest, store: Store = Depends(get_store)):
    try:
        u = store.user.find_by_cookie(body.auth_cookie)
    except NotFoundError as e:
        raise Unauthorized("record not found") from e
    return u.to_dict()


@router.get("/users/{user_id}")
def get_user_by_id(
    user_id: str = Path(..., pattern=r"^[+-]?\d+$", max_length=64),
    store: Store = Depends(get_store),
):
    uid = int(user_id)
    if not INT64_MIN <= uid <= INT64_MAX:
        raise MalformedRequestError("invalid id")
    try:
        u = store.user.find(uid)
    except NotFoundError:
        return Response(status_code=204)
    return u.to_dict()


@private.get("/whoami")
def whoami(user: User = Depends(require_user)):
    return user.to_dict()
