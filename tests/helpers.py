"""Shared builders for tests: settings, an app on in-memory SQLite, and common API calls."""

from typing import Any

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.context import AppContext
from app.main import create_app
from app.models import Base
from app.services.users import provision_admin

TEST_JWT_SECRET = "test-secret-key-for-the-unit-test-suite-0123456789"

ADMIN_EMAIL = "admin@acme.io"
ADMIN_PASSWORD = "admin-password-1"


def make_settings(**overrides: Any) -> Settings:
    """Settings for tests: in-memory SQLite, cheap bcrypt, no .env file."""
    values: dict[str, Any] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": TEST_JWT_SECRET,
        "BCRYPT_ROUNDS": 4,
        "PASSWORD_MIN_LENGTH": 2,
        "NOTIFY_WEBHOOK_URL": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_context(**overrides: Any) -> AppContext:
    """AppContext with all tables created."""
    context = AppContext(make_settings(**overrides))
    Base.metadata.create_all(context.engine)
    return context


def make_app(**overrides: Any) -> FastAPI:
    app = create_app(make_settings(**overrides))
    Base.metadata.create_all(app.state.context.engine)
    return app


def add_admin(app: FastAPI, email: str = ADMIN_EMAIL, password: str = ADMIN_PASSWORD) -> int:
    """Provision an approved admin directly through the service; returns its id."""
    context: AppContext = app.state.context
    db = context.session()
    try:
        user, _created = provision_admin(db, email, password, settings=context.settings)
        return user.id
    finally:
        db.close()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def signup(client: TestClient, email: str, password: str, **extra: Any) -> dict[str, Any]:
    response = client.post("/api/v1/signup", json={"email": email, "password": password, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def login(client: TestClient, email: str, password: str) -> str:
    response = client.post("/api/v1/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["access_token"]


def approve(client: TestClient, admin_token: str, user_id: int, role: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"user_id": user_id}
    if role is not None:
        body["role"] = role
    response = client.post("/api/v1/admin", json=body, headers=bearer(admin_token))
    assert response.status_code == 200, response.text
    return response.json()
