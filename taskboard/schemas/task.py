"""Pydantic schemas for task request/response validation.

Request bodies accept camelCase (``dueDate``) as well as snake_case field
names; responses are always camelCase.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone
from typing import Optional

from taskboard.models.task import TaskStatus


def _naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    # la DB stocke des timestamps UTC naïfs
    if v is not None and v.tzinfo is not None:
        v = v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


def _clean_title(v: Optional[str]) -> str:
    if v is None:
        raise ValueError("title must not be null")
    v = v.strip()
    if not v:
        raise ValueError("title must not be empty")
    return v


_request_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(BaseModel):
    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: TaskStatus = TaskStatus.pending
    due_date: Optional[datetime] = None

    model_config = _request_config

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v):
        return _clean_title(v)

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, v):
        return _naive_utc(v)


class TaskUpdate(BaseModel):
    """Partial update: absent fields are left alone.

    ``description`` and ``dueDate`` can be cleared with an explicit null,
    ``title`` and ``status`` cannot.
    """

    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = None

    model_config = _request_config

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v):
        return _clean_title(v)

    @field_validator("status")
    @classmethod
    def status_not_null(cls, v):
        if v is None:
            raise ValueError("status must not be null")
        return v

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, v):
        return _naive_utc(v)

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        data = self.model_dump(exclude_unset=True)
        if "status" in data:
            data["status"] = data["status"].value
        return data


class TaskResponse(BaseModel):
    id: int
    owner_id: int
    title: str
    description: Optional[str]
    status: TaskStatus
    due_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessageResponse(BaseModel):
    message: str
