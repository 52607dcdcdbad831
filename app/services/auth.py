"""Credential issuer: verify email/password and mint a signed, time-bound access token."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidCredentialsError, PermissionDeniedError
from app.core.security import create_access_token, dummy_password_hash, verify_password
from app.schemas.auth import TokenResponse
from app.services.users import find_user

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def authenticate(
    session: Session,
    email: str,
    password: str,
    *,
    settings: "Settings",
) -> TokenResponse:
    """
    Return an access token for valid credentials.

    Unknown email and wrong password fail identically with InvalidCredentialsError.
    The approval flag is only checked here when LOGIN_REQUIRES_APPROVAL is set;
    otherwise unapproved users get a token and are stopped at task creation.
    """
    user = find_user(session, email)
    if user is None:
        # Keep timing comparable to the wrong-password path.
        verify_password(password, dummy_password_hash(settings.BCRYPT_ROUNDS))
        logger.warning("Login failed: unknown email")
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        logger.warning("Login failed: bad password for user id=%s", user.id)
        raise InvalidCredentialsError()

    if settings.LOGIN_REQUIRES_APPROVAL and not user.can_act:
        logger.info("Login refused: user id=%s is pending approval", user.id)
        raise PermissionDeniedError("Account is pending approval.")

    token, _claims = create_access_token(sub=user.email, role=user.role, settings=settings)
    logger.info("Issued token for user id=%s", user.id)
    return TokenResponse(
        access_token=token,
        token_type="bearer",
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
    )
