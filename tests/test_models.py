import pytest

from conftest import make_user
from musicauth.errors import ValidationError


def test_valid_user():
    make_user().validate()


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"login": ""}, "login"),
        ({"login": "bad login"}, "login"),
        ({"login": "al!ce"}, "login"),
        ({"password": ""}, "password"),
        ({"password": "short"}, "password"),
        ({"password": "x" * 101}, "password"),
        ({"stage_name": ""}, "stage_name"),
        ({"stage_name": "x" * 61}, "stage_name"),
    ],
)
def test_invalid_user(overrides, field):
    u = make_user(**overrides)
    with pytest.raises(ValidationError) as exc:
        u.validate()
    assert field in exc.value.fields


def test_password_optional_once_encrypted():
    u = make_user(password="", encrypted_password="$argon2id$existing")
    u.validate()


def test_before_create_hashes_password():
    u = make_user()
    u.before_create()
    assert u.encrypted_password
    assert u.encrypted_password != u.password
    assert u.compare_password("password")
    assert not u.compare_password("wrong-password")


def test_sanitize_hides_password_from_output():
    u = make_user(id=3)
    assert "password" in u.to_dict()
    u.sanitize()
    out = u.to_dict()
    assert "password" not in out
    assert "encrypted_password" not in out
    assert out == {"id": 3, "login": "user", "stage_name": "Stage Name", "music_auth_cookie": " "}
