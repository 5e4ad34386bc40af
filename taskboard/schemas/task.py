"""Pydantic schemas for task request/response validation."""

from datetime import datetime, timezone
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, field_validator


# Schemas tâches

class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = ""
    tags: Optional[List[str]] = None


class TaskUpdate(BaseModel):
    """Mise à jour partielle: seuls les champs présents dans le JSON sont appliqués."""

    title: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None


class TaskStatusUpdate(BaseModel):
    status: str


class TaskResponse(BaseModel):
    id: int
    title: str
    description: str
    status: str
    tags: List[str]
    archived: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite renvoie des datetimes naïfs, ils ont été écrits en UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class TaskList(BaseModel):
    items: List[TaskResponse]


class ArchivedTaskPage(BaseModel):
    items: List[TaskResponse]
    total: int
    page: int
    page_size: int
    has_more: bool


# Réponses des actions

class TaskCreated(BaseModel):
    id: int


class TaskStatusChanged(BaseModel):
    id: int
    status: str


class TaskUpdated(BaseModel):
    id: int
    updated: bool = True


class TaskArchived(BaseModel):
    id: int
    archived: bool


class TaskRestored(BaseModel):
    id: int
    archived: bool = False
    status: str


class TaskDeleted(BaseModel):
    id: int
    deleted: bool = True
