from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from taskboard.core.auth import CurrentUser, get_current_user
from taskboard.core.database import get_db
from taskboard.core.errors import ValidationError
from taskboard.models.task import TaskStatus
from taskboard.schemas.task import TaskCreate, TaskUpdate, TaskResponse, MessageResponse
from taskboard.services import task_service

# Toutes les routes exigent un token valide, vérifié avant d'ouvrir la session DB
router = APIRouter(prefix="/tasks", tags=["tasks"], dependencies=[Depends(get_current_user)])


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return task_service.create_task(
        db,
        current_user.user_id,
        title=task_data.title,
        description=task_data.description,
        status=task_data.status,
        due_date=task_data.due_date,
    )


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    status_filter: Optional[str] = Query(None, alias="status"),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    # "?status=" vide = pas de filtre
    status_value = None
    if status_filter:
        try:
            status_value = TaskStatus(status_filter)
        except ValueError:
            raise ValidationError(f"status must be one of: {', '.join(s.value for s in TaskStatus)}")
    return task_service.list_tasks(db, current_user.user_id, status_value)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return task_service.get_task(db, current_user.user_id, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_data: Optional[TaskUpdate] = None,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    # sans corps : mise à jour vide, comme {}
    changes = task_data.changes() if task_data is not None else {}
    return task_service.update_task(db, current_user.user_id, task_id, changes)


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task_service.delete_task(db, current_user.user_id, task_id)
    return {"message": "Task removed"}


@router.patch("/{task_id}/toggle", response_model=TaskResponse)
def toggle_task(
    task_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return task_service.toggle_task(db, current_user.user_id, task_id)
