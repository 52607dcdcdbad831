"""Approval registry: list users awaiting approval and approve them (admin only at the API layer)."""

import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.models.user import ROLE_ADMIN, ROLE_VALUES, User
from app.services.users import get_user

logger = logging.getLogger(__name__)


def list_pending(session: Session) -> list[User]:
    """All unapproved users, oldest signup first."""
    return session.query(User).filter(User.approved.is_(False)).order_by(User.id).all()


def approve(
    session: Session,
    user_id: int,
    approved_by: int | None = None,
    role: str | None = None,
) -> User:
    """
    Mark a user approved, optionally granting a non-admin role at the same time.

    Approving an already approved user with the same role is a no-op.
    Raises NotFoundError if the user does not exist.
    """
    if role is not None and (role not in ROLE_VALUES or role == ROLE_ADMIN):
        raise ValidationError("Role cannot be assigned on approval.", field="role")
    user = get_user(session, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    changed = not user.approved or (role is not None and user.role != role)
    if changed:
        user.approved = True
        if role is not None:
            user.role = role
        session.commit()
        session.refresh(user)
    logger.info("User id=%s approved as %s by admin id=%s", user.id, user.role, approved_by)
    return user
