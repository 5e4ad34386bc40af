from fastapi import APIRouter, Depends, Query
from typing import Optional

from taskboard.routers.tasks import get_repository
from taskboard.schemas.tag import TagList
from taskboard.services.task_repository import TaskRepository

router = APIRouter(prefix="/api/tags", tags=["tags"])


@router.get("", response_model=TagList)
def list_tags(q: Optional[str] = Query(None), repo: TaskRepository = Depends(get_repository)):
    # tags distincts, triés, filtrés par sous-chaîne si q est fourni
    return {"items": repo.list_tags(q)}
