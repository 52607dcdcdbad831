"""Credential store: create, look up and provision users. Passwords are stored only as bcrypt hashes."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.security import BCRYPT_MAX_BYTES, hash_password
from app.models.user import ROLE_ADMIN, ROLE_VALUES, User

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_password(password: str, settings: "Settings") -> None:
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValidationError(
            f"Password must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded.",
            field="password",
        )
    if not (settings.PASSWORD_MIN_LENGTH <= len(password) <= settings.PASSWORD_MAX_LENGTH):
        raise ValidationError(
            f"Password must be {settings.PASSWORD_MIN_LENGTH}-{settings.PASSWORD_MAX_LENGTH} characters.",
            field="password",
        )


def find_user(session: Session, email: str) -> User | None:
    return session.query(User).filter(User.email == normalize_email(email)).first()


def get_user(session: Session, user_id: int) -> User | None:
    return session.get(User, user_id)


def create_user(
    session: Session,
    email: str,
    password: str,
    role: str,
    *,
    settings: "Settings",
    approved: bool = False,
) -> User:
    """
    Create a user with a hashed password.

    Raises ConflictError if the email is taken. The unique index on users.email
    is the final arbiter, so two concurrent signups cannot both succeed.
    """
    email = normalize_email(email)
    if not email:
        raise ValidationError("Email must be non-empty.", field="email")
    if role not in ROLE_VALUES:
        raise ValidationError(f"Role must be one of {sorted(ROLE_VALUES)}.", field="role")
    validate_password(password, settings)

    if find_user(session, email) is not None:
        raise ConflictError("Email already registered.", details={"field": "email"})

    user = User(
        email=email,
        password_hash=hash_password(password, rounds=settings.BCRYPT_ROUNDS),
        role=role,
        approved=approved,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ConflictError("Email already registered.", details={"field": "email"}) from e
    session.refresh(user)
    logger.info("Created user id=%s role=%s approved=%s", user.id, user.role, user.approved)
    return user


def set_approved(session: Session, user_id: int, approved: bool) -> User:
    """Set the approval flag. Raises NotFoundError if the user does not exist."""
    user = get_user(session, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    if user.approved != approved:
        user.approved = approved
        session.commit()
        session.refresh(user)
    return user


def provision_admin(
    session: Session,
    email: str,
    password: str,
    *,
    settings: "Settings",
) -> tuple[User, bool]:
    """
    Ensure an approved admin account exists for email. Safe to run repeatedly.

    Returns (user, created). An existing admin is left as is apart from being
    approved; an existing non-admin account with that email is a conflict.
    """
    existing = find_user(session, email)
    if existing is not None:
        if existing.role != ROLE_ADMIN:
            raise ConflictError(
                f"User '{existing.email}' exists with role '{existing.role}', not admin.",
                details={"field": "email"},
            )
        if not existing.approved:
            existing.approved = True
            session.commit()
            session.refresh(existing)
        return existing, False
    user = create_user(
        session,
        email,
        password,
        ROLE_ADMIN,
        settings=settings,
        approved=True,
    )
    return user, True
