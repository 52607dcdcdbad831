"""Task operations with approval and ownership checks."""

import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, PermissionDeniedError
from app.models.task import Task
from app.models.user import PRIVILEGED_ROLES
from app.schemas.auth import CurrentUser
from app.schemas.tasks import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


def _require_approved(actor: CurrentUser) -> None:
    """Unapproved non-admin accounts get no task access at all, whatever their role."""
    if not actor.can_act:
        raise PermissionDeniedError("Account is pending approval.")


def _can_access(actor: CurrentUser, task: Task) -> bool:
    return task.owner_id == actor.id or actor.role in PRIVILEGED_ROLES


def _load_for(session: Session, actor: CurrentUser, task_id: int) -> Task:
    _require_approved(actor)
    task = session.get(Task, task_id)
    if task is None:
        raise NotFoundError("Task", task_id)
    if not _can_access(actor, task):
        raise PermissionDeniedError("You do not have access to this task.")
    return task


def create_task(session: Session, actor: CurrentUser, data: TaskCreate) -> Task:
    """Create a task owned by actor. Unapproved non-admin users are refused."""
    _require_approved(actor)
    task = Task(
        title=data.title,
        description=data.description,
        status=data.status,
        owner_id=actor.id,
    )
    session.add(task)
    session.commit()
    session.refresh(task)
    logger.info("Task id=%s created by user id=%s", task.id, actor.id)
    return task


def list_tasks(session: Session, actor: CurrentUser, status: str | None = None) -> list[Task]:
    """Admins and managers see every task; other roles see only their own."""
    _require_approved(actor)
    query = session.query(Task)
    if actor.role not in PRIVILEGED_ROLES:
        query = query.filter(Task.owner_id == actor.id)
    if status is not None:
        query = query.filter(Task.status == status)
    return query.order_by(Task.id).all()


def get_task(session: Session, actor: CurrentUser, task_id: int) -> Task:
    return _load_for(session, actor, task_id)


def update_task(session: Session, actor: CurrentUser, task_id: int, changes: TaskUpdate) -> Task:
    task = _load_for(session, actor, task_id)
    fields = changes.model_dump(exclude_unset=True, exclude_none=True)
    for name, value in fields.items():
        setattr(task, name, value)
    if fields:
        session.commit()
        session.refresh(task)
        logger.info("Task id=%s updated by user id=%s: %s", task.id, actor.id, sorted(fields))
    return task


def delete_task(session: Session, actor: CurrentUser, task_id: int) -> None:
    task = _load_for(session, actor, task_id)
    session.delete(task)
    session.commit()
    logger.info("Task id=%s deleted by user id=%s", task_id, actor.id)
