# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from musicauth.core.models import User
from musicauth.errors import ConflictError, NotFoundError, StoreError
from musicauth.infra.database import UserRow, make_session_factory

log = logging.getLogger(__name__)


def _to_user(row: UserRow) -> User:
    return User(
        id=row.id,
        login=row.login,
        encrypted_password=row.encrypted_password,
        stage_name=row.stage_name,
        auth_cookie=row.auth_cookie,
    )


class SQLUserRepository:
    def __init__(self, store: "SQLStore") -> None:
        self._store = store

    def create(self, user: User) -> User:
        user.validate()
        user.before_create()

        row = UserRow(
            login=user.login,
            encrypted_password=user.encrypted_password,
            stage_name=user.stage_name,
            auth_cookie=user.auth_cookie,
        )
        with self._store.session() as db:
            try:
                db.add(row)
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise ConflictError() from e
            except SQLAlchemyError as e:
                db.rollback()
                log.error("insert user %r failed: %s", user.login, e)
                raise StoreError() from e
            user.id = row.id
        return user

    def find(self, user_id: int) -> User:
        return self._one(UserRow.id == user_id)

    def find_by_login(self, login: str) -> User:
        return self._one(UserRow.login == login)

    def find_by_cookie(self, cookie: str) -> User:
        return self._one(UserRow.auth_cookie == cookie)

    def update_cookie(self, login: str, cookie: str) -> None:
        stmt = update(UserRow).where(UserRow.login == login).values(auth_cookie=cookie)
        with self._store.session() as db:
            try:
                result = db.execute(stmt)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                log.error("update cookie for %r failed: %s", login, e)
                raise StoreError() from e
        if result.rowcount == 0:
            raise NotFoundError()

    def _one(self, cond) -> User:
        with self._store.session() as db:
            try:
                # Ordered so duplicate auth cookies resolve to the oldest user.
                row: Optional[UserRow] = db.execute(
                    select(UserRow).where(cond).order_by(UserRow.id).limit(1)
                ).scalar_one_or_none()
            except SQLAlchemyError as e:
                log.error("user lookup failed: %s", e)
                raise StoreError() from e
            if row is None:
                raise NotFoundError()
            return _to_user(row)


class SQLStore:
    def __init__(self, engine: Engine) -> None:
        self.session = make_session_factory(engine)
        self._user_repository: Optional[SQLUserRepository] = None

    @property
    def user(self) -> SQLUserRepository:
        if self._user_repository is None:
            self._user_repository = SQLUserRepository(self)
        return self._user_repository
