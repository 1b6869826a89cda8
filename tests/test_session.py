import pytest
from fastapi import Request, Response

from musicauth.auth.session import COOKIE_NAME, Session, SessionManager
from musicauth.errors import ConfigError, SessionError


def _request(token: str = "") -> Request:
    headers = []
    if token:
        headers.append((b"cookie", f"{COOKIE_NAME}={token}".encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


def _saved_token(response: Response) -> str:
    cookie = response.headers["set-cookie"]
    return cookie.split(";", 1)[0].split("=", 1)[1]


def test_missing_cookie_gives_new_empty_session(sessions):
    s = sessions.get(_request())
    assert s == {}
    assert s.is_new


def test_save_then_get_round_trip(sessions):
    s = sessions.get(_request())
    s["user_id"] = 42
    resp = Response()
    sessions.save(resp, s)

    loaded = sessions.get(_request(_saved_token(resp)))
    assert loaded["user_id"] == 42
    assert not loaded.is_new


def test_cookie_attributes(sessions):
    resp = Response()
    sessions.save(resp, Session(user_id=1))
    cookie = resp.headers["set-cookie"].lower()
    assert cookie.startswith(COOKIE_NAME + "=")
    assert "max-age=86400" in cookie
    assert "secure" in cookie
    assert "samesite=none" in cookie
    assert "httponly" in cookie


def test_tampered_cookie_is_ignored(sessions):
    resp = Response()
    sessions.save(resp, Session(user_id=1))
    token = _saved_token(resp)
    tampered = "x" + token
    assert sessions.get(_request(tampered)) == {}


def test_cookie_signed_with_other_key_is_ignored(sessions):
    resp = Response()
    SessionManager("another-key").save(resp, Session(user_id=1))
    assert sessions.get(_request(_saved_token(resp))) == {}


def test_expired_cookie_is_ignored(sessions):
    resp = Response()
    sessions.save(resp, Session(user_id=1))
    expired = SessionManager("test-session-key", max_age=-1)
    assert expired.get(_request(_saved_token(resp))) == {}


def test_unserializable_session_fails(sessions):
    with pytest.raises(SessionError):
        sessions.save(Response(), Session(user_id=object()))


def test_empty_key_is_rejected():
    with pytest.raises(ConfigError):
        SessionManager("")
