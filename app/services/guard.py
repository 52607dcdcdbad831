"""Access guard: verify bearer tokens and revoke them on logout."""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import jwt

from app.core.exceptions import (
    ExpiredTokenError,
    InvalidSignatureError,
    MissingTokenError,
    RevokedTokenError,
)
from app.core.security import decode_access_token
from app.schemas.auth import TokenClaims

if TYPE_CHECKING:
    from app.core.config import Settings
    from app.services.revocation import TokenDenylist

logger = logging.getLogger(__name__)


def verify_token(
    token: str | None,
    *,
    settings: "Settings",
    denylist: "TokenDenylist",
) -> TokenClaims:
    """
    Check signature, expiry and revocation; return the token's identity and role.

    Raises MissingTokenError, ExpiredTokenError, InvalidSignatureError or
    RevokedTokenError (all AuthError). Never mutates state.
    """
    if not token or not token.strip():
        raise MissingTokenError()
    try:
        payload = decode_access_token(token.strip(), settings)
    except jwt.ExpiredSignatureError as e:
        raise ExpiredTokenError() from e
    except jwt.PyJWTError as e:
        logger.debug("Rejected token: %s", e)
        raise InvalidSignatureError() from e

    sub = payload.get("sub")
    role = payload.get("role")
    jti = payload.get("jti")
    if not isinstance(sub, str) or not sub or not isinstance(role, str) or not isinstance(jti, str):
        raise InvalidSignatureError()

    if denylist.is_revoked(jti):
        raise RevokedTokenError()

    return TokenClaims(
        identity=sub,
        role=role,
        jti=jti,
        expires_at=datetime.fromtimestamp(payload["exp"], UTC),
    )


def revoke_token(claims: TokenClaims, denylist: "TokenDenylist") -> None:
    """Deny further use of the token until it expires."""
    denylist.revoke(claims.jti, claims.expires_at)
    logger.info("Revoked token jti=%s", claims.jti)
