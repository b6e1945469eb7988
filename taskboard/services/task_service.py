"""Task service

Every lookup by task id goes through ``owned_tasks`` so the owner filter is
part of the same statement as the read or the write. A task owned by someone
else is reported exactly like a missing one.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import case
from sqlalchemy.orm import Query, Session

from taskboard.core.errors import NotFound, ValidationError
from taskboard.models.task import Task, TaskStatus

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"

UPDATABLE_FIELDS = {"title", "description", "status", "due_date"}

# bornes de la colonne Integer (PostgreSQL)
MAX_TASK_ID = 2**31 - 1


def owned_tasks(db: Session, owner_id: int, task_id: int) -> Query:
    # un id hors bornes ne peut correspondre à aucune tâche
    if not 1 <= task_id <= MAX_TASK_ID:
        raise NotFound(TASK_NOT_FOUND)
    return db.query(Task).filter(Task.id == task_id, Task.owner_id == owner_id)


def create_task(
    db: Session,
    owner_id: int,
    title: str,
    description: Optional[str] = None,
    status: TaskStatus = TaskStatus.pending,
    due_date: Optional[datetime] = None,
) -> Task:
    title = (title or "").strip()
    if not title:
        raise ValidationError("title must not be empty")

    task = Task(
        owner_id=owner_id,
        title=title,
        description=description,
        status=TaskStatus(status or TaskStatus.pending).value,
        due_date=due_date,
    )
    db.add(task)
    db.commit()
    db.refresh(task)

    logger.info(f"User {owner_id} created task {task.id}")
    return task


def list_tasks(db: Session, owner_id: int, status: Optional[TaskStatus] = None) -> List[Task]:
    query = db.query(Task).filter(Task.owner_id == owner_id)
    if status is not None:
        query = query.filter(Task.status == TaskStatus(status).value)
    return query.order_by(Task.created_at.desc(), Task.id.desc()).all()


def get_task(db: Session, owner_id: int, task_id: int) -> Task:
    task = owned_tasks(db, owner_id, task_id).first()
    if task is None:
        raise NotFound(TASK_NOT_FOUND)
    return task


def update_task(db: Session, owner_id: int, task_id: int, changes: dict) -> Task:
    """Overwrite the given fields of an owned task.

    ``changes`` holds only the fields the caller supplied; a None value clears
    a nullable field. Keys outside UPDATABLE_FIELDS (owner_id, id, ...) are
    rejected.
    """
    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

    values = dict(changes)
    if "title" in values:
        values["title"] = (values["title"] or "").strip()
        if not values["title"]:
            raise ValidationError("title must not be empty")
    if "status" in values:
        if values["status"] is None:
            raise ValidationError("status must not be null")
        values["status"] = TaskStatus(values["status"]).value
    values["updated_at"] = datetime.utcnow()

    # filtre propriétaire + écriture dans le même UPDATE
    updated = owned_tasks(db, owner_id, task_id).update(values, synchronize_session=False)
    if not updated:
        db.rollback()
        raise NotFound(TASK_NOT_FOUND)
    db.commit()

    return get_task(db, owner_id, task_id)


def toggle_task(db: Session, owner_id: int, task_id: int) -> Task:
    flipped = case(
        (Task.status == TaskStatus.completed.value, TaskStatus.pending.value),
        else_=TaskStatus.completed.value,
    )
    updated = owned_tasks(db, owner_id, task_id).update(
        {Task.status: flipped, Task.updated_at: datetime.utcnow()},
        synchronize_session=False,
    )
    if not updated:
        db.rollback()
        raise NotFound(TASK_NOT_FOUND)
    db.commit()

    return get_task(db, owner_id, task_id)


def delete_task(db: Session, owner_id: int, task_id: int) -> None:
    deleted = owned_tasks(db, owner_id, task_id).delete(synchronize_session=False)
    if not deleted:
        db.rollback()
        raise NotFound(TASK_NOT_FOUND)
    db.commit()

    logger.info(f"User {owner_id} deleted task {task_id}")
