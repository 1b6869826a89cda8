# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError

from musicauth.errors import HashError

# argon2-cffi defaults follow the RFC 9106 low-memory profile.
_PH = PasswordHasher()


def configure(
    *,
    time_cost: Optional[int] = None,
    memory_cost: Optional[int] = None,
    parallelism: Optional[int] = None,
) -> None:
    """Replace the module hasher with one using the given work factor.

    Parameters left as ``None`` keep argon2-cffi's defaults. Existing hashes
    stay verifiable because argon2 encodes its parameters in the hash string.
    """
    global _PH
    kwargs = {}
    if time_cost is not None:
        kwargs["time_cost"] = int(time_cost)
    if memory_cost is not None:
        kwargs["memory_cost"] = int(memory_cost)
    if parallelism is not None:
        kwargs["parallelism"] = int(parallelism)
    _PH = PasswordHasher(**kwargs)


def hash_password(plain: str) -> str:
    if not plain:
        raise ValueError("empty password")
    try:
        return _PH.hash(plain)
    except HashingError as e:
        raise HashError("could not hash password") from e


def verify_password(hash_value: str, plain: str) -> bool:
    if not hash_value or not plain:
        return False
    try:
        return _PH.verify(hash_value, plain)
    except (VerificationError, InvalidHashError):
        return False
