"""Unit tests for password hashing and access tokens."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from teestore.core.errors import AuthenticationError
from teestore.core.security import create_access_token, decode_access_token, hash_password, verify_password
from teestore.server.core.config import AuthConfig


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(jwt_secret="unit-test-secret", jwt_expires_days=3)


class TestPasswords:
    def test_hash_round_trip(self):
        hashed = hash_password("secret123")

        assert hashed != "secret123"
        assert hashed.startswith("$2")
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("secret123") != hash_password("secret123")

    def test_empty_hash_never_verifies(self):
        assert verify_password("anything", "") is False


class TestAccessTokens:
    """Test issuing and validating access tokens."""

    def test_token_carries_user_and_expiry(self, auth_config):
        token, expires_at = create_access_token(42, auth_config)

        assert decode_access_token(token, auth_config) == 42
        remaining = expires_at - datetime.now(timezone.utc)
        assert timedelta(days=2, hours=23) < remaining <= timedelta(days=3)

    def test_wrong_secret(self, auth_config):
        token, _ = create_access_token(42, auth_config)

        with pytest.raises(AuthenticationError, match="Invalid token"):
            decode_access_token(token, AuthConfig(jwt_secret="another-secret"))

    def test_expired(self, auth_config):
        token = jwt.encode(
            {"sub": "42", "exp": datetime.now(timezone.utc) - timedelta(seconds=5)},
            auth_config.jwt_secret,
            algorithm=auth_config.jwt_algorithm,
        )

        with pytest.raises(AuthenticationError, match="expired"):
            decode_access_token(token, auth_config)

    @pytest.mark.parametrize("subject", [None, "abc"])
    def test_bad_subject(self, auth_config, subject):
        payload = {"exp": datetime.now(timezone.utc) + timedelta(hours=1)}
        if subject is not None:
            payload["sub"] = subject
        token = jwt.encode(payload, auth_config.jwt_secret, algorithm=auth_config.jwt_algorithm)

        with pytest.raises(AuthenticationError):
            decode_access_token(token, auth_config)

    def test_error_maps_to_401(self):
        assert AuthenticationError("x").status_code == 401
