"""Request/response schemas for signup, login and the current user."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

Role = Literal["admin", "manager", "employee", "customer"]
# Roles an admin may assign when approving; admin itself only comes from provisioning.
AssignableRole = Literal["manager", "employee", "customer"]


def _normalize_email(value: str) -> str:
    return value.strip().lower()


class SignupRequest(BaseModel):
    """New account. Always created with the configured signup role and unapproved."""

    email: EmailStr = Field(..., description="Login identity; stored lowercased")
    password: str = Field(..., min_length=1, max_length=72, description="Password")

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Seconds until the token expires")


class TokenClaims(BaseModel):
    """Verified contents of a bearer token."""

    identity: str
    role: str
    jti: str
    expires_at: datetime


class CurrentUser(BaseModel):
    """Authenticated user (id, email, role, approval) for dependency injection."""

    id: int
    email: str
    role: str
    approved: bool

    class Config:
        from_attributes = True

    @property
    def can_act(self) -> bool:
        return self.approved or self.role == "admin"


class UserResponse(BaseModel):
    """User as returned by signup and /me (never includes the password hash)."""

    id: int
    email: str
    role: str
    approved: bool
    created_at: datetime | None = None

    class Config:
        from_attributes = True
