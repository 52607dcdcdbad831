"""Health check endpoint with database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.context import get_app_settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """
    Return service health, database connectivity and the active approval policy.
    Always 200 so monitors can read the body; a lost database shows as 'degraded'.
    """
    connected = check_db_connected(db)
    return HealthResponse(
        status="ok" if connected else "degraded",
        service=request.app.title,
        version=request.app.version,
        environment=settings.APP_ENV,
        database="connected" if connected else "disconnected",
        approval_gate="login" if settings.LOGIN_REQUIRES_APPROVAL else "tasks",
    )
