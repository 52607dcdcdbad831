"""Admin approval endpoints: list pending users and approve them."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.core.config import Settings
from app.core.context import get_app_settings
from app.core.database import get_db
from app.schemas.admin import ApproveRequest, ApproveResponse, PendingUser
from app.schemas.auth import CurrentUser
from app.services.approvals import approve, list_pending
from app.services.notifications import EVENT_USER_APPROVED, send_notification

router = APIRouter()


@router.get("", response_model=list[PendingUser])
def get_pending_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[PendingUser]:
    """List users awaiting approval, oldest signup first (admin only)."""
    return [PendingUser.model_validate(u) for u in list_pending(db)]


@router.post("", response_model=ApproveResponse)
def approve_user(
    body: ApproveRequest,
    background_tasks: BackgroundTasks,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ApproveResponse:
    """
    Approve a user by id (admin only), optionally assigning a non-admin role.
    Idempotent: approving an approved
    user returns the same result. 404 if the user does not exist.
    """
    user = approve(db, body.user_id, approved_by=admin.id, role=body.role)
    background_tasks.add_task(
        send_notification,
        settings,
        EVENT_USER_APPROVED,
        {"user_id": user.id, "email": user.email, "role": user.role, "approved_by": admin.id},
    )
    return ApproveResponse.model_validate(user)
