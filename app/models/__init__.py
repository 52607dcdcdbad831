"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.task import Task
from app.models.user import User

__all__ = ["Base", "Task", "User"]
