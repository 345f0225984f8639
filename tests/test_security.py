from datetime import datetime, timedelta, timezone

import jwt
import pytest

from service_request.core.security import TOKEN_TTL, AdminAuth, AdminIdentity, parse_bearer
from service_request.errors import InvalidCredentials, Unauthenticated


@pytest.fixture
def auth(settings) -> AdminAuth:
    return AdminAuth(settings)


def test_login_issues_token_that_authenticates(auth):
    token = auth.login("admin", "password123")

    assert auth.authenticate(token) == AdminIdentity(username="admin")


def test_token_expires_after_one_hour(auth):
    claims = jwt.decode(auth.login("admin", "password123"), "test-secret", algorithms=["HS256"])

    assert claims["exp"] - claims["iat"] == int(TOKEN_TTL.total_seconds())


@pytest.mark.parametrize(
    "username, password",
    [("admin", "wrong"), ("root", "password123"), ("", ""), (None, None), ("ADMIN", "password123")],
)
def test_login_rejects_other_credentials(auth, username, password):
    with pytest.raises(InvalidCredentials) as excinfo:
        auth.login(username, password)

    assert excinfo.value.message == "Invalid credentials"


def test_token_still_valid_just_before_expiry(auth):
    issued = datetime.now(timezone.utc) - TOKEN_TTL + timedelta(minutes=1)

    assert auth.authenticate(auth.issue_token("admin", issued_at=issued)).username == "admin"


def test_expired_token_is_rejected(auth):
    issued = datetime.now(timezone.utc) - TOKEN_TTL - timedelta(minutes=1)
    token = auth.issue_token("admin", issued_at=issued)

    with pytest.raises(Unauthenticated) as excinfo:
        auth.authenticate(token)

    assert excinfo.value.status_code == 403


def test_missing_token_is_unauthenticated(auth):
    with pytest.raises(Unauthenticated) as excinfo:
        auth.authenticate(None)

    assert excinfo.value.status_code == 401


@pytest.mark.parametrize("token", ["garbage", "a.b.c", "eyJhbGciOiJIUzI1NiJ9.e30."])
def test_malformed_token_is_rejected(auth, token):
    with pytest.raises(Unauthenticated) as excinfo:
        auth.authenticate(token)

    assert excinfo.value.status_code == 403


def test_token_signed_with_other_secret_is_rejected(auth):
    forged = jwt.encode(
        {"sub": "admin", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        "another-secret",
        algorithm="HS256",
    )

    with pytest.raises(Unauthenticated):
        auth.authenticate(forged)


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc.def", "abc.def"),
        ("bearer   abc.def  ", "abc.def"),
        ("Basic abc", None),
        ("Bearer", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_bearer(header, expected):
    assert parse_bearer(header) == expected
