# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from musicauth.auth.passwords import hash_password, verify_password
from musicauth.errors import ValidationError

DEFAULT_AUTH_COOKIE = " "

PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 100
STAGE_NAME_MIN_LEN = 1
STAGE_NAME_MAX_LEN = 60


@dataclass
class User:
    login: str = ""
    password: str = ""
    stage_name: str = ""
    auth_cookie: str = DEFAULT_AUTH_COOKIE
    encrypted_password: str = ""
    id: int = 0

    def validate(self) -> None:
        """Check login, password and stage name; collect every violation."""
        errors: Dict[str, str] = {}

        if not self.login:
            errors["login"] = "cannot be blank"
        elif not self.login.isalnum():
            errors["login"] = "must contain letters and digits only"

        if not self.password:
            if not self.encrypted_password:
                errors["password"] = "cannot be blank"
        elif not PASSWORD_MIN_LEN <= len(self.password) <= PASSWORD_MAX_LEN:
            errors["password"] = f"the length must be between {PASSWORD_MIN_LEN} and {PASSWORD_MAX_LEN}"

        if not self.stage_name:
            errors["stage_name"] = "cannot be blank"
        elif not STAGE_NAME_MIN_LEN <= len(self.stage_name) <= STAGE_NAME_MAX_LEN:
            errors["stage_name"] = f"the length must be between {STAGE_NAME_MIN_LEN} and {STAGE_NAME_MAX_LEN}"

        if errors:
            raise ValidationError(errors)

    def before_create(self) -> None:
        if self.password:
            self.encrypted_password = hash_password(self.password)

    def sanitize(self) -> None:
        self.password = ""

    def compare_password(self, password: str) -> bool:
        return verify_password(self.encrypted_password, password)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "login": self.login,
            "stage_name": self.stage_name,
            "music_auth_cookie": self.auth_cookie,
        }
        if self.password:
            out["password"] = self.password
        return out
