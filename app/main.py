"""FastAPI application factory. No business logic; only wiring, error handlers and middleware.

There is no module-level app instance; serve with
``uvicorn --factory app.main:create_app``.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1 import router as v1_router
from app.core.config import Settings, get_settings
from app.core.context import AppContext
from app.core.exceptions import AppException, AuthError
from app.core.logging_setup import configure_logging

logger = logging.getLogger(__name__)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": "Internal server error", "details": {}},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and its AppContext; the context is closed on shutdown."""
    settings = settings or get_settings()
    configure_logging(settings)
    context = AppContext(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting Gatekeeper API (env=%s)", settings.APP_ENV)
        yield
        context.close()

    app = FastAPI(
        title="Gatekeeper API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Gatekeeper API"}

    return app

