"""
Tests for session token issuing and verification.
"""
import time

import jwt
import pytest

from storefront.auth.jwt import TokenService

SECRET = "unit-test-secret"


@pytest.fixture
def tokens():
    return TokenService(SECRET, expire_seconds=3600)


@pytest.mark.parametrize("is_admin", [False, True])
def test_token_round_trip(tokens, is_admin):
    token = tokens.generate_token("user_123", "test@example.com", is_admin)
    assert isinstance(token, str)

    token_data = tokens.verify_token(token)
    assert token_data is not None
    assert token_data.user_id == "user_123"
    assert token_data.email == "test@example.com"
    assert token_data.is_admin is is_admin


def test_expiry_uses_configured_ttl():
    tokens = TokenService(SECRET, expire_seconds=120)
    before = int(time.time())
    token_data = tokens.verify_token(tokens.generate_token("user_1", "a@b.com", False))
    assert before + 120 <= token_data.exp <= int(time.time()) + 120


def test_expired_token_is_invalid():
    expired = TokenService(SECRET, expire_seconds=-10)
    token = expired.generate_token("user_123", "test@example.com", False)
    assert expired.verify_token(token) is None


@pytest.mark.parametrize("token", ["not.a.valid.token", "invalid.token.here", "", "abc"])
def test_malformed_token_is_invalid(tokens, token):
    assert tokens.verify_token(token) is None


def test_token_signed_with_other_secret_is_invalid(tokens):
    other = TokenService("some-other-secret")
    token = other.generate_token("user_123", "test@example.com", True)
    assert tokens.verify_token(token) is None


def test_token_missing_claims_is_invalid(tokens):
    token = jwt.encode(
        {"sub": "user_123", "exp": int(time.time()) + 60},
        SECRET,
        algorithm="HS256",
    )
    assert tokens.verify_token(token) is None


def test_unsigned_token_is_invalid(tokens):
    token = jwt.encode(
        {"sub": "user_123", "email": "x@y.com", "is_admin": True, "exp": int(time.time()) + 60},
        None,
        algorithm="none",
    )
    assert tokens.verify_token(token) is None


def test_refresh_keeps_claims(tokens):
    token = tokens.generate_token("user_9", "admin@example.com", True)
    refreshed = tokens.refresh_token(token)
    assert refreshed is not None

    token_data = tokens.verify_token(refreshed)
    assert token_data.user_id == "user_9"
    assert token_data.email == "admin@example.com"
    assert token_data.is_admin is True


def test_refresh_rejects_invalid_token(tokens):
    assert tokens.refresh_token("not.a.valid.token") is None


def test_secret_is_required():
    with pytest.raises(ValueError):
        TokenService("")
