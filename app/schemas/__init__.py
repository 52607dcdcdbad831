"""Pydantic request/response schemas."""

from app.schemas.admin import ApproveRequest, ApproveResponse, PendingUser
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    Role,
    SignupRequest,
    TokenClaims,
    TokenResponse,
    UserResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.tasks import TaskCreate, TaskResponse, TaskStatus, TaskUpdate

__all__ = [
    "ApproveRequest",
    "ApproveResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "PendingUser",
    "Role",
    "SignupRequest",
    "TaskCreate",
    "TaskResponse",
    "TaskStatus",
    "TaskUpdate",
    "TokenClaims",
    "TokenResponse",
    "UserResponse",
]
