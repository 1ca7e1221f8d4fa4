"""Tests for token creation and validation."""
from datetime import datetime, timedelta, timezone

import pytest

from app.config import Settings
from app.core.errors import AuthenticationError
from app.core.security import DemoCredentialVerifier, create_access_token, decode_access_token


@pytest.fixture
def settings():
    return Settings(AUTH_SECRET_KEY="test-secret-key-with-enough-length", AUTH_TOKEN_LIFETIME_MINUTES=60)


def test_demo_verifier_accepts_anything():
    user = DemoCredentialVerifier().verify("someone", None)
    assert user.user_name == "someone"
    assert user.city == "Antwerp"


def test_round_trip_claims(settings):
    user = DemoCredentialVerifier().verify("kevin", "secret")
    claims = decode_access_token(create_access_token(user, settings), settings)
    assert claims["sub"] == "1"
    assert claims["city"] == "Antwerp"
    assert claims["iss"] == settings.AUTH_ISSUER
    assert claims["aud"] == settings.AUTH_AUDIENCE


def test_expired_token_is_rejected(settings):
    user = DemoCredentialVerifier().verify("kevin", "secret")
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    token = create_access_token(user, settings, now=issued)
    with pytest.raises(AuthenticationError):
        decode_access_token(token, settings)


def test_wrong_audience_is_rejected(settings):
    user = DemoCredentialVerifier().verify("kevin", "secret")
    token = create_access_token(user, settings)
    other = settings.model_copy(update={"AUTH_AUDIENCE": "someone-else"})
    with pytest.raises(AuthenticationError):
        decode_access_token(token, other)


def test_wrong_key_is_rejected(settings):
    user = DemoCredentialVerifier().verify("kevin", "secret")
    token = create_access_token(user, settings)
    other = settings.model_copy(update={"AUTH_SECRET_KEY": "another-secret-key-with-enough-len"})
    with pytest.raises(AuthenticationError):
        decode_access_token(token, other)
