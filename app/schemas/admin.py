"""Schemas for the admin approval endpoints."""

from pydantic import BaseModel, Field

from app.schemas.auth import AssignableRole


class PendingUser(BaseModel):
    """Unapproved user awaiting an admin decision."""

    id: int
    email: str

    class Config:
        from_attributes = True


class ApproveRequest(BaseModel):
    """Approve a user, optionally assigning a role other than the signup default."""

    user_id: int = Field(..., ge=1, description="Id of the user to approve")
    role: AssignableRole | None = Field(
        default=None,
        description="Role to grant on approval; the current role is kept when omitted",
    )


class ApproveResponse(BaseModel):
    id: int
    email: str
    role: str
    approved: bool

    class Config:
        from_attributes = True
