from fastapi import APIRouter, Depends, Path, status, Query
from sqlalchemy.orm import Session
from typing import Annotated, Optional

from taskboard.core.database import get_db
from taskboard.schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskStatusUpdate,
    TaskResponse,
    TaskList,
    ArchivedTaskPage,
    TaskCreated,
    TaskStatusChanged,
    TaskUpdated,
    TaskArchived,
    TaskRestored,
    TaskDeleted,
)
from taskboard.services.query_builder import MAX_SQL_INT
from taskboard.services.task_repository import TaskRepository, UNSET

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

# id hors INTEGER 64 bits -> 400 plutôt qu'une erreur du driver SQLite
TaskId = Annotated[int, Path(ge=-MAX_SQL_INT - 1, le=MAX_SQL_INT)]


def get_repository(db: Session = Depends(get_db)) -> TaskRepository:
    return TaskRepository(db)


def _is_truthy(value: Optional[str]) -> bool:
    return value is not None and (value == "1" or value.lower() == "true")


@router.post("", response_model=TaskCreated, status_code=status.HTTP_201_CREATED)
def create_task(task_data: TaskCreate, repo: TaskRepository = Depends(get_repository)):
    task_id = repo.create(task_data.title, task_data.description, task_data.tags)
    return {"id": task_id}


@router.get("")
def list_tasks(
    repo: TaskRepository = Depends(get_repository),
    archived: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    # gardés en str: une valeur illisible retombe sur le défaut au lieu d'un 400
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None),
):
    if not _is_truthy(archived):
        return TaskList(items=[TaskResponse.model_validate(t) for t in repo.list_active()])

    items, total, pagination = repo.list_archived(q, page, page_size)
    return ArchivedTaskPage(
        items=[TaskResponse.model_validate(t) for t in items],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
        has_more=pagination.has_more(len(items), total),
    )


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: TaskId, repo: TaskRepository = Depends(get_repository)):
    return repo.get(task_id)


@router.patch("/{task_id}/status", response_model=TaskStatusChanged)
def update_status(task_id: TaskId, body: TaskStatusUpdate, repo: TaskRepository = Depends(get_repository)):
    new_status = repo.set_status(task_id, body.status)
    return {"id": task_id, "status": new_status}


@router.patch("/{task_id}/update", response_model=TaskUpdated)
def update_task(task_id: TaskId, task_data: TaskUpdate, repo: TaskRepository = Depends(get_repository)):
    # présent dans le JSON -> appliqué, absent -> UNSET
    provided = task_data.model_fields_set
    repo.update_fields(
        task_id,
        title=task_data.title if "title" in provided else UNSET,
        description=task_data.description if "description" in provided else UNSET,
        tags=task_data.tags if "tags" in provided else UNSET,
    )
    return {"id": task_id, "updated": True}


@router.post("/{task_id}/archive", response_model=TaskArchived)
def archive_task(task_id: TaskId, repo: TaskRepository = Depends(get_repository)):
    repo.archive(task_id)
    return {"id": task_id, "archived": True}


@router.post("/{task_id}/restore", response_model=TaskRestored)
def restore_task(task_id: TaskId, repo: TaskRepository = Depends(get_repository)):
    new_status = repo.restore(task_id)
    return {"id": task_id, "archived": False, "status": new_status}


@router.post("/{task_id}/copy", response_model=TaskCreated, status_code=status.HTTP_201_CREATED)
def duplicate_task(task_id: TaskId, repo: TaskRepository = Depends(get_repository)):
    return {"id": repo.duplicate(task_id)}


@router.delete("/{task_id}", response_model=TaskDeleted)
def delete_task(task_id: TaskId, repo: TaskRepository = Depends(get_repository)):
    repo.delete(task_id)
    return {"id": task_id, "deleted": True}
