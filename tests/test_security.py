from datetime import timedelta

import pytest
from jose import jwt

from core.exceptions import ExpiredTokenError, InvalidTokenError
from core.security import (
    ALGORITHM,
    Identity,
    TokenService,
    hash_password,
    verify_password,
)
from models import Role


def test_hash_and_verify_password():
    hashed = hash_password("password123")
    assert hashed != "password123"
    assert verify_password("password123", hashed)
    assert not verify_password("password124", hashed)


def test_verify_password_rejects_malformed_hash():
    assert not verify_password("password123", "not-a-bcrypt-hash")
    assert not verify_password("", hash_password("password123"))


def test_long_password_is_truncated_not_rejected():
    password = "x" * 100
    hashed = hash_password(password)
    assert verify_password(password, hashed)
    # bcrypt only looks at the first 72 bytes
    assert verify_password("x" * 72, hashed)


def test_token_round_trip():
    service = TokenService("secret", timedelta(hours=1))
    token = service.issue(Identity(user_id=42, role=Role.DESIGNER))
    assert service.verify(token) == Identity(user_id=42, role=Role.DESIGNER)


def test_token_carries_sub_role_iat_exp():
    service = TokenService("secret", timedelta(hours=24))
    claims = jwt.decode(
        service.issue(Identity(user_id=7, role=Role.BUYER)),
        "secret",
        algorithms=[ALGORITHM],
    )
    assert claims["sub"] == "7"
    assert claims["role"] == "BUYER"
    assert claims["exp"] - claims["iat"] == 24 * 3600


def test_expired_token():
    service = TokenService("secret", timedelta(seconds=-10))
    token = service.issue(Identity(user_id=1, role=Role.ADMIN))
    with pytest.raises(ExpiredTokenError):
        service.verify(token)


def test_token_signed_with_other_secret_is_rejected():
    token = TokenService("other", timedelta(hours=1)).issue(
        Identity(user_id=1, role=Role.ADMIN)
    )
    with pytest.raises(InvalidTokenError):
        TokenService("secret", timedelta(hours=1)).verify(token)


def test_tampered_and_garbage_tokens_are_rejected():
    service = TokenService("secret", timedelta(hours=1))
    token = service.issue(Identity(user_id=1, role=Role.BUYER))
    with pytest.raises(InvalidTokenError):
        service.verify(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))
    with pytest.raises(InvalidTokenError):
        service.verify("not.a.token")
    with pytest.raises(InvalidTokenError):
        service.verify("")


def test_token_with_unknown_role_is_rejected():
    token = jwt.encode({"sub": "1", "role": "OWNER"}, "secret", algorithm=ALGORITHM)
    with pytest.raises(InvalidTokenError):
        TokenService("secret", timedelta(hours=1)).verify(token)


def test_blank_secret_is_refused():
    with pytest.raises(ValueError):
        TokenService("", timedelta(hours=1))
