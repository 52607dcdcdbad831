"""Request/response schemas for tasks."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

TaskStatus = Literal["pending", "in_progress", "completed"]


def _validate_title(value: str | None) -> str | None:
    """Titles are stripped; a blank title is rejected."""
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        raise ValueError("title must be non-empty")
    return stripped


class TaskCreate(BaseModel):
    title: str = Field(..., max_length=255, description="Short task title")
    description: str = Field(default="", max_length=10_000)
    status: TaskStatus = "pending"

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _validate_title(v)


class TaskUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    title: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=10_000)
    status: TaskStatus | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return _validate_title(v)


class TaskResponse(BaseModel):
    id: int
    title: str
    description: str
    status: TaskStatus
    owner_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
