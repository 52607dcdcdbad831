"""Application context: owns settings, database handles and the token denylist."""

import logging

from fastapi import Request
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import build_engine, build_session_factory
from app.services.revocation import TokenDenylist

logger = logging.getLogger(__name__)


class AppContext:
    """
    Process state passed explicitly instead of living in module globals.

    Built once per application (or per CLI run) and closed on shutdown.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.engine = build_engine(settings)
        self.session_factory = build_session_factory(self.engine)
        self.denylist = TokenDenylist()
        self._closed = False

    def session(self) -> Session:
        """Open a new ORM session; the caller is responsible for closing it."""
        return self.session_factory()

    def close(self) -> None:
        if self._closed:
            return
        self.denylist.clear()
        self.engine.dispose()
        self._closed = True
        logger.info("Application context closed")


def get_context(request: Request) -> AppContext:
    """Dependency: the AppContext attached to the running application."""
    return request.app.state.context


def get_app_settings(request: Request) -> Settings:
    """Dependency: settings of the running application."""
    return request.app.state.context.settings
