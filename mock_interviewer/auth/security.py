"""
Security utilities: bcrypt password hashing, signed session tokens and the
session gate dependency used by protected routes.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from fastapi import Request
from jose import JWTError, jwt

from mock_interviewer.utils.config import get_auth_config
from mock_interviewer.utils.constants import AUTH_COOKIE_NAME, TOKEN_TTL_DAYS, TOKEN_TTL_SECONDS
from mock_interviewer.utils.errors import ConfigurationError, InvalidToken, Unauthorized

logger = logging.getLogger(__name__)


# ==================== Password hashing ====================

def hash_password(plain_password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a password with bcrypt.

    Args:
        plain_password: Plain-text password
        rounds: bcrypt cost factor (defaults to BCRYPT_ROUNDS)

    Returns:
        bcrypt hash string
    """
    salt = bcrypt.gensalt(rounds=rounds or get_auth_config()["bcrypt_rounds"])
    return bcrypt.hashpw(plain_password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


# ==================== Session tokens ====================

class TokenService:
    """Issues and verifies HS256 session tokens carrying a user id."""

    def __init__(self, secret: Optional[str], algorithm: str = "HS256", ttl: timedelta = timedelta(days=TOKEN_TTL_DAYS)):
        if not secret:
            raise ConfigurationError("JWT_SECRET is not set")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    @classmethod
    def from_config(cls) -> "TokenService":
        auth_config = get_auth_config()
        return cls(auth_config["secret"], algorithm=auth_config["algorithm"])

    def issue(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "id": user_id,
            "iat": now,
            "exp": now + (expires_delta if expires_delta is not None else self.ttl),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Return the user id embedded in a token.

        Raises:
            InvalidToken: on a bad signature, expiry or missing claim
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidToken(str(e)) from e
        user_id = payload.get("id")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidToken("Token has no user id")
        return user_id


def cookie_options(production: Optional[bool] = None) -> Dict[str, Any]:
    """Attributes for the session cookie; relaxed cross-site only in production."""
    if production is None:
        production = get_auth_config()["production"]
    return {
        "httponly": True,
        "secure": production,
        "samesite": "none" if production else "lax",
        "max_age": TOKEN_TTL_SECONDS,
        "path": "/",
    }


# ==================== Session gate ====================

def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def require_auth(request: Request) -> str:
    """
    FastAPI dependency that authenticates the request from its session cookie.

    The user id is stored on ``request.state.user_id`` and returned.

    Raises:
        Unauthorized: if the cookie is missing or its token does not verify
    """
    token = request.cookies.get(AUTH_COOKIE_NAME)
    if not token:
        raise Unauthorized()
    try:
        user_id = get_token_service(request).verify(token)
    except InvalidToken as e:
        logger.info(f"Rejected session token: {e}")
        raise Unauthorized()
    request.state.user_id = user_id
    return user_id
