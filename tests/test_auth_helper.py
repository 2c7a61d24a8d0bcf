import pytest
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt
from starlette.requests import Request

from app.core.config import settings
from app.utils.auth_helper import (
    can_access_branch,
    create_access_token,
    decode_access_token,
    get_auth_token,
    get_current_user,
    has_permission,
    has_role,
    hash_password,
    verify_password,
)

ADMIN = {"sub": "1", "role": "admin", "permissions": []}
CLERK = {
    "sub": "2",
    "role": "user",
    "permissions": ["read:products", "write:all"],
    "branch": "b-1",
}


def _request(headers=None):
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


def test_hash_password_round_trip():
    hashed = hash_password("s3cret!")

    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)


def test_hashes_are_salted():
    assert hash_password("same") != hash_password("same")


def test_token_round_trip():
    token = create_access_token({"sub": "42", "role": "user"})
    claims = decode_access_token(token)

    assert claims["sub"] == "42"
    assert claims["role"] == "user"


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_decode_rejects_malformed_tokens(token):
    assert decode_access_token(token) is None


def test_decode_rejects_foreign_signature():
    token = jwt.encode({"sub": "1", "type": "access"}, "other-secret", algorithm=settings.ALGORITHM)

    assert decode_access_token(token) is None


def test_current_user_from_cookie():
    token = create_access_token({"sub": "7", "role": "user"})
    request = _request({"Cookie": f"{settings.AUTH_COOKIE_NAME}={token}"})

    assert get_current_user(request)["sub"] == "7"


def test_current_user_from_bearer_header():
    token = create_access_token({"sub": "8", "role": "user"})
    request = _request({"Authorization": f"Bearer {token}"})

    assert get_current_user(request)["sub"] == "8"


def test_current_user_without_token():
    assert get_current_user(_request()) is None


@pytest.mark.parametrize(
    "user, permission, expected",
    [
        (ADMIN, "delete:everything", True),
        (CLERK, "read:products", True),
        (CLERK, "write:invoices", True),
        (CLERK, "read:invoices", False),
        (CLERK, "delete:products", False),
        (CLERK, "", False),
        ({"role": "user"}, "read:products", False),
        (None, "read:products", False),
    ],
)
def test_has_permission(user, permission, expected):
    assert has_permission(user, permission) is expected


def test_has_role():
    assert has_role(ADMIN, "admin")
    assert not has_role(CLERK, "admin")
    assert not has_role(CLERK, "")
    assert not has_role(None, "user")


def test_can_access_branch():
    assert can_access_branch(ADMIN, "anything")
    assert can_access_branch(CLERK, "b-1")
    assert not can_access_branch(CLERK, "b-2")
    assert not can_access_branch(CLERK, "")
    assert not can_access_branch(None, "b-1")


@pytest.mark.parametrize("sub", ["abc", "", "12a", 12])
def test_decode_rejects_non_numeric_subject(sub):
    token = jwt.encode({"sub": sub, "type": "access"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    assert decode_access_token(token) is None


def test_decode_rejects_other_token_types():
    token = jwt.encode({"sub": "1", "type": "refresh"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    assert decode_access_token(token) is None


def test_cookie_wins_over_bearer_credentials():
    cookie_token = create_access_token({"sub": "7", "role": "user"})
    header_token = create_access_token({"sub": "8", "role": "user"})
    request = _request({"Cookie": f"{settings.AUTH_COOKIE_NAME}={cookie_token}"})
    credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=header_token)

    assert get_auth_token(request, credentials) == cookie_token


def test_bearer_credentials_used_without_cookie():
    token = create_access_token({"sub": "9", "role": "user"})
    credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

    assert get_current_user(_request(), credentials)["sub"] == "9"


@pytest.mark.parametrize("header", ["Basic abc123", "Bearer", "Bearer ", "token"])
def test_non_bearer_authorization_is_ignored(header):
    assert get_auth_token(_request({"Authorization": header})) is None
