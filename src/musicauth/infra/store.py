# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""User store contract shared by the SQL and in-memory backends."""

from __future__ import annotations

from typing import Protocol

from musicauth.core.models import User


class UserRepository(Protocol):
    def create(self, user: User) -> User:
        """Validate, hash and insert ``user``; sets ``user.id``.

        Raises ValidationError, ConflictError or StoreError.
        """
        ...

    def find(self, user_id: int) -> User:
        ...

    def find_by_login(self, login: str) -> User:
        """Return the full record, encrypted password included."""
        ...

    def find_by_cookie(self, cookie: str) -> User:
        ...

    def update_cookie(self, login: str, cookie: str) -> None:
        """Overwrite the auth cookie; NotFoundError when no row matched."""
        ...


class Store(Protocol):
    @property
    def user(self) -> UserRepository:
        ...
