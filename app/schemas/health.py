"""Health check payload."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus the state a deploy check cares about: schema reachable, approval policy."""

    status: Literal["ok", "degraded"] = Field(
        description="'degraded' when the database cannot be reached"
    )
    service: str = Field(description="Application title")
    version: str = Field(description="Application version")
    environment: Literal["dev", "prod"]
    database: Literal["connected", "disconnected"]
    approval_gate: Literal["login", "tasks"] = Field(
        description="Where unapproved accounts are stopped: at login, or only at task access"
    )
