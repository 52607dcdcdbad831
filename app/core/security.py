"""Password hashing and JWT creation/verification for authentication."""

import uuid
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from app.core.config import Settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# bcrypt only uses the first 72 bytes of the secret.
BCRYPT_MAX_BYTES = 72


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache
def dummy_password_hash(rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash compared against when the identity is unknown, so both login failures cost the same."""
    return hash_password(uuid.uuid4().hex, rounds=rounds)


def create_access_token(
    sub: str,
    role: str,
    settings: Settings,
    now: datetime | None = None,
) -> tuple[str, dict[str, Any]]:
    """
    Create a JWT access token with sub (user email), role, jti, iat and exp.
    Returns the encoded token and the claims it carries.
    """
    now = now or datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": sub,
        "role": role,
        "jti": uuid.uuid4().hex,
        "exp": expire,
        "iat": now,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    token = jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )
    return token, payload


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, role, jti, exp, iat).
    Raises jwt.ExpiredSignatureError when expired and jwt.PyJWTError on any other problem.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp", "iat", "jti"]},
    )
