"""
Unit tests for password hashing, session tokens and cookie attributes.
"""
import pytest
from datetime import timedelta

from mock_interviewer.auth.security import TokenService, cookie_options, hash_password, verify_password
from mock_interviewer.utils.constants import TOKEN_TTL_SECONDS
from mock_interviewer.utils.errors import ConfigurationError, InvalidToken


@pytest.fixture
def token_service():
    return TokenService("unit-test-secret")


class TestPasswordHashing:
    """Test bcrypt hashing helpers."""

    def test_hash_and_verify(self):
        hashed = hash_password("secret1", rounds=4)

        assert hashed != "secret1"
        assert verify_password("secret1", hashed)
        assert not verify_password("secret2", hashed)

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("secret1", "not-a-bcrypt-hash") is False


class TestTokenService:
    """Test token issue and verification."""

    def test_round_trip(self, token_service):
        token = token_service.issue("user-1")

        assert token_service.verify(token) == "user-1"

    def test_tampered_token_rejected(self, token_service):
        token = token_service.issue("user-1")
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        with pytest.raises(InvalidToken):
            token_service.verify(tampered)

    def test_token_from_other_secret_rejected(self, token_service):
        token = TokenService("another-secret").issue("user-1")

        with pytest.raises(InvalidToken):
            token_service.verify(token)

    def test_expired_token_rejected(self, token_service):
        token = token_service.issue("user-1", expires_delta=timedelta(seconds=-10))

        with pytest.raises(InvalidToken):
            token_service.verify(token)

    def test_garbage_rejected(self, token_service):
        with pytest.raises(InvalidToken):
            token_service.verify("definitely.not.a-token")

    @pytest.mark.parametrize("secret", [None, ""])
    def test_missing_secret_is_fatal(self, secret):
        with pytest.raises(ConfigurationError):
            TokenService(secret)

    def test_default_ttl_is_seven_days(self, token_service):
        assert token_service.ttl == timedelta(days=7)


class TestCookieOptions:
    """Test session cookie attributes."""

    def test_production_cookie(self):
        options = cookie_options(production=True)

        assert options["httponly"] is True
        assert options["secure"] is True
        assert options["samesite"] == "none"
        assert options["max_age"] == TOKEN_TTL_SECONDS
        assert options["path"] == "/"

    def test_development_cookie(self):
        options = cookie_options(production=False)

        assert options["httponly"] is True
        assert options["secure"] is False
        assert options["samesite"] == "lax"
