# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Any, Optional

from fastapi import Request, Response
from itsdangerous import BadSignature, BadTimeSignature, URLSafeTimedSerializer

from musicauth.errors import ConfigError, SessionError

COOKIE_NAME = "music_auth_cookie"
DEFAULT_MAX_AGE_SECONDS = 86400  # 24 hours
SESSION_SALT = "musicauth.session.v1"


class Session(dict):
    """Session values plus whether they came from the request cookie."""

    def __init__(self, *args: Any, is_new: bool = True, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.is_new = is_new


class SessionManager:
    def __init__(
        self,
        secret_key: str,
        *,
        cookie_name: str = COOKIE_NAME,
        max_age: int = DEFAULT_MAX_AGE_SECONDS,
    ) -> None:
        if not secret_key:
            raise ConfigError("session_key is not set")
        self.cookie_name = cookie_name
        self.max_age = max_age
        self._serializer = URLSafeTimedSerializer(secret_key=secret_key, salt=SESSION_SALT)

    def get(self, request: Request) -> Session:
        token = request.cookies.get(self.cookie_name, "")
        data = self._decode(token)
        if data is None:
            return Session()
        return Session(data, is_new=False)

    def save(self, response: Response, session: Session) -> None:
        try:
            token = self._serializer.dumps(dict(session))
        except (TypeError, ValueError) as e:
            raise SessionError("could not encode session") from e
        response.set_cookie(
            self.cookie_name,
            token,
            max_age=self.max_age,
            path="/",
            secure=True,
            httponly=True,
            samesite="none",
        )

    def _decode(self, token: str) -> Optional[dict]:
        if not token:
            return None
        try:
            data = self._serializer.loads(token, max_age=self.max_age)
        except (BadSignature, BadTimeSignature):
            return None
        if not isinstance(data, dict):
            return None
        return data
