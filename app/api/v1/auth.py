"""Signup, JWT login/logout and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.context import AppContext, get_app_settings, get_context
from app.core.database import get_db
from app.core.exceptions import InvalidSignatureError, PermissionDeniedError
from app.models.user import ROLE_ADMIN
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    SignupRequest,
    TokenClaims,
    TokenResponse,
    UserResponse,
)
from app.services.auth import authenticate
from app.services.guard import revoke_token, verify_token
from app.services.notifications import EVENT_USER_SIGNED_UP, send_notification
from app.services.users import create_user, find_user

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_token_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    context: Annotated[AppContext, Depends(get_context)],
) -> TokenClaims:
    """Dependency: require a valid, unrevoked Bearer JWT. Raises 401 otherwise."""
    token = credentials.credentials if credentials is not None else None
    return verify_token(token, settings=context.settings, denylist=context.denylist)


def get_current_user(
    claims: Annotated[TokenClaims, Depends(get_token_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Dependency: the user the token was issued to, with current approval state."""
    user = find_user(db, claims.identity)
    if user is None:
        # Indistinguishable from a bad token.
        raise InvalidSignatureError()
    return CurrentUser.model_validate(user)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != ROLE_ADMIN:
        raise PermissionDeniedError("Admin access required")
    return current_user


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserResponse:
    """
    Register a new account. The account starts unapproved: it can log in but
    cannot create tasks until an admin approves it.
    """
    user = create_user(
        db,
        body.email,
        body.password,
        settings.DEFAULT_SIGNUP_ROLE,
        settings=settings,
    )
    background_tasks.add_task(
        send_notification,
        settings,
        EVENT_USER_SIGNED_UP,
        {"user_id": user.id, "email": user.email, "role": user.role},
    )
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    return authenticate(db, body.email, body.password, settings=settings)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    claims: Annotated[TokenClaims, Depends(get_token_claims)],
    context: Annotated[AppContext, Depends(get_context)],
) -> Response:
    """Revoke the presented token; later requests with it get 401."""
    revoke_token(claims, context.denylist)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=UserResponse)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Return the authenticated user, including approval state."""
    user = find_user(db, current_user.email)
    return UserResponse.model_validate(user)
