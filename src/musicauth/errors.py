# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Typed failures raised by the stores, the session manager and the hasher.

Handlers in ``musicauth.app`` translate them into HTTP status codes.
"""

from __future__ import annotations

from typing import Dict, Optional


class AuthServiceError(Exception):
    status_code = 500
    message = "internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(AuthServiceError):
    status_code = 422
    message = "validation failed"

    def __init__(self, fields: Optional[Dict[str, str]] = None, message: Optional[str] = None) -> None:
        self.fields = dict(fields or {})
        if message is None and self.fields:
            message = "; ".join(f"{k}: {v}" for k, v in sorted(self.fields.items()))
        super().__init__(message)


class MalformedRequestError(AuthServiceError):
    status_code = 400
    message = "malformed request body"


class ConflictError(AuthServiceError):
    status_code = 422
    message = "login already taken"


class NotFoundError(AuthServiceError):
    status_code = 404
    message = "record not found"


class Unauthorized(AuthServiceError):
    status_code = 401
    message = "not authenticated"


class StoreError(AuthServiceError):
    pass


class SessionError(AuthServiceError):
    pass


class HashError(AuthServiceError):
    pass


class InternalError(AuthServiceError):
    pass


class ConfigError(AuthServiceError):
    message = "invalid configuration"
