# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import itertools
from dataclasses import replace
from threading import Lock
from typing import Dict

from musicauth.core.models import User
from musicauth.errors import ConflictError, NotFoundError


class MemoryUserRepository:
    """Dict-backed repository for tests and local runs.

    Records are copied in and out so callers never share a stored instance.
    """

    def __init__(self) -> None:
        self._users: Dict[int, User] = {}
        self._ids = itertools.count(1)
        self._lock = Lock()

    def create(self, user: User) -> User:
        user.validate()
        user.before_create()
        with self._lock:
            if any(u.login == user.login for u in self._users.values()):
                raise ConflictError()
            user.id = next(self._ids)
            self._users[user.id] = replace(user, password="")
        return user

    def find(self, user_id: int) -> User:
        with self._lock:
            u = self._users.get(user_id)
        if u is None:
            raise NotFoundError()
        return replace(u)

    def find_by_login(self, login: str) -> User:
        return self._first(lambda u: u.login == login)

    def find_by_cookie(self, cookie: str) -> User:
        return self._first(lambda u: u.auth_cookie == cookie)

    def update_cookie(self, login: str, cookie: str) -> None:
        with self._lock:
            for u in self._users.values():
                if u.login == login:
                    u.auth_cookie = cookie
                    return
        raise NotFoundError()

    def _first(self, pred) -> User:
        with self._lock:
            for u in self._users.values():
                if pred(u):
                    return replace(u)
        raise NotFoundError()


class MemoryStore:
    def __init__(self) -> None:
        self._user_repository = MemoryUserRepository()

    @property
    def user(self) -> MemoryUserRepository:
        return self._user_repository
