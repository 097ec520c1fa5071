"""
Password hashing and JWT helpers.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from voice_relay.config import Settings
from voice_relay.models.user import TokenData

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with a random salt at the given bcrypt cost factor."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """
    Check a password against a stored bcrypt hash.

    A malformed stored hash counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), password_hash.encode("utf-8"))
    except ValueError as e:
        logger.error("Stored password hash could not be checked: %s", e)
        return False


def create_access_token(
    data: dict,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed JWT carrying ``data``.

    Args:
        data: Claims to encode. ``sub`` should hold the user id.
        settings: Provides the signing secret, algorithm and default lifetime.
        expires_delta: Overrides the configured token lifetime.

    Returns:
        Encoded JWT string.
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> Optional[TokenData]:
    """Decode and verify a JWT. Returns None if it is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.debug("Rejected access token: %s", e)
        return None

    user_id = payload.get("sub")
    email = payload.get("email")
    if user_id is None or email is None:
        return None
    return TokenData(user_id=user_id, email=email)
