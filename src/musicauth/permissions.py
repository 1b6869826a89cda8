# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging

from fastapi import Request

from musicauth.auth.session import SessionManager
from musicauth.core.models import User
from musicauth.errors import InternalError, NotFoundError, SessionError, StoreError, Unauthorized
from musicauth.infra.store import Store

log = logging.getLogger(__name__)


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_sessions(request: Request) -> SessionManager:
    return request.app.state.sessions


def require_user(request: Request) -> User:
    """Resolve the session cookie to a stored user or fail with 401.

    Used as ``Depends(require_user)``; the user reaches the handler as a
    parameter.
    """
    try:
        session = get_sessions(request).get(request)
    except SessionError as e:
        log.error("session read failed: %s", e)
        raise InternalError() from e

    user_id = session.get("user_id")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise Unauthorized()

    try:
        return get_store(request).user.find(user_id)
    except NotFoundError as e:
        raise Unauthorized() from e
    except StoreError as e:
        raise InternalError() from e
