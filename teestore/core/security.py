"""Password hashing and access token helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt

from teestore.server.core.config import AuthConfig, settings

from .errors import AuthenticationError


def hash_password(password: str) -> str:
    """Hash a plain password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    if not password_hash:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def create_access_token(user_id: int, config: Optional[AuthConfig] = None) -> tuple[str, datetime]:
    """Issue a signed access token for a user.

    Args:
        user_id: Identifier stored in the ``sub`` claim
        config: Signing configuration, defaults to the application settings

    Returns:
        The encoded token and its (aware, UTC) expiry time
    """
    config = config or settings.auth
    expires_at = datetime.now(timezone.utc) + timedelta(days=config.jwt_expires_days)
    payload: Dict[str, Any] = {"sub": str(user_id), "exp": expires_at}
    token = jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)
    return token, expires_at


def decode_access_token(token: str, config: Optional[AuthConfig] = None) -> int:
    """Validate a token and return the user id it was issued for.

    Raises:
        AuthenticationError: If the token is expired, tampered with or malformed
    """
    config = config or settings.auth
    try:
        payload = jwt.decode(token, config.jwt_secret, algorithms=[config.jwt_algorithm])
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise AuthenticationError("Invalid token") from e

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise AuthenticationError("Invalid token subject")
    return int(subject)
