import pytest

from argon2.exceptions import HashingError

from musicauth.auth import passwords
from musicauth.auth.passwords import hash_password, verify_password
from musicauth.errors import HashError


def test_hash_is_salted_and_verifies():
    h1 = hash_password("secret1")
    h2 = hash_password("secret1")
    assert h1 != "secret1"
    assert h1 != h2
    assert verify_password(h1, "secret1")
    assert verify_password(h2, "secret1")


def test_verify_rejects_wrong_password():
    h = hash_password("secret1")
    assert verify_password(h, "secret2") is False


@pytest.mark.parametrize("bad_hash", ["", "not-a-hash", "$argon2id$v=19$garbage"])
def test_verify_malformed_hash_returns_false(bad_hash):
    assert verify_password(bad_hash, "secret1") is False


def test_empty_password_is_rejected():
    with pytest.raises(ValueError):
        hash_password("")
    assert verify_password(hash_password("secret1"), "") is False


def test_hashing_failure_raises_hash_error(monkeypatch):
    class FailingHasher:
        def hash(self, plain):
            raise HashingError("out of memory")

    monkeypatch.setattr(passwords, "_PH", FailingHasher())
    with pytest.raises(HashError):
        hash_password("secret1")
