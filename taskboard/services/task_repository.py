"""Task repository

Toutes les lectures/écritures sur ``tasks`` et ``task_tags`` passent par ici.
Chaque opération qui écrit tourne dans une seule transaction: commit si tout
passe, rollback sinon (pas de tâche créée sans ses tags, pas de tags supprimés
sans les nouveaux).
"""

import logging
from contextlib import contextmanager
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.core.errors import NotFound, StorageError
from taskboard.models.task import Task, TaskStatus, TaskTag, utcnow
from taskboard.services.query_builder import Pagination, UpdateBuilder, archived_filters
from taskboard.services.validation import normalize_tags, validate_status, validate_title

logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self):
        return "UNSET"


# champ absent de la requête (différent de None)
UNSET = _Unset()


class TaskRepository:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _transaction(self, action: str):
        try:
            yield
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"{action} failed: {e}") from e
        except Exception:
            self.db.rollback()
            raise

    @contextmanager
    def _reading(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"{action} failed: {e}") from e

    def _insert_tags(self, task_id: int, tags: Iterable[str]) -> None:
        for tag in tags:
            self.db.add(TaskTag(task_id=task_id, tag=tag))

    def _replace_tags(self, task_id: int, tags: Iterable[str]) -> None:
        self.db.query(TaskTag).filter(TaskTag.task_id == task_id).delete(synchronize_session=False)
        self._insert_tags(task_id, tags)

    def _execute_update(self, builder: UpdateBuilder) -> None:
        result = self.db.execute(builder.build())
        if result.rowcount == 0:
            raise NotFound(builder.task_id)

    # --- lecture ---

    def get(self, task_id: int) -> Task:
        with self._reading("get task"):
            task = self.db.query(Task).filter(Task.id == task_id).first()
        if not task:
            raise NotFound(task_id)
        return task

    def list_active(self) -> List[Task]:
        with self._reading("list active tasks"):
            return self.db.query(Task).filter(Task.archived == False).order_by(Task.id.desc()).all()  # noqa: E712

    def list_archived(
        self,
        q: Optional[str] = None,
        page=None,
        page_size=None,
    ) -> Tuple[List[Task], int, Pagination]:
        """Tâches archivées filtrées par ``q`` et paginées.

        Retourne (items, total, pagination); ``total`` ignore la pagination.
        """
        pagination = Pagination(page, page_size)
        with self._reading("list archived tasks"):
            query = self.db.query(Task).filter(*archived_filters(q))
            total = query.count()
            items = (
                query.order_by(Task.id.desc())
                .limit(pagination.limit)
                .offset(pagination.offset)
                .all()
            )
        return items, total, pagination

    def list_tags(self, q: Optional[str] = None) -> List[str]:
        q = (q or "").strip()
        with self._reading("list tags"):
            query = self.db.query(TaskTag.tag).distinct()
            if q:
                query = query.filter(TaskTag.tag.contains(q, autoescape=True))
            return [row.tag for row in query.order_by(TaskTag.tag).all()]

    # --- écriture ---

    def create(self, title: str, description: Optional[str] = "", tags: Optional[Iterable[str]] = None) -> int:
        validate_title(title)
        now = utcnow()
        with self._transaction("create task"):
            task = Task(
                title=title,
                description=description or "",
                status=TaskStatus.PLANNING.value,
                archived=False,
                created_at=now,
                updated_at=now,
            )
            self.db.add(task)
            self.db.flush()
            new_id = task.id
            self._insert_tags(new_id, normalize_tags(tags))
        logger.info("created task %s", new_id)
        return new_id

    def update_fields(self, task_id: int, title=UNSET, description=UNSET, tags=UNSET) -> None:
        """Mise à jour partielle. UNSET = champ non fourni, laissé tel quel.

        ``tags=[]`` vide la liste des tags; ``updated_at`` est toujours rafraîchi.
        """
        builder = UpdateBuilder(task_id)
        if title is not UNSET:
            builder.set(Task.title, validate_title(title))
        if description is not UNSET:
            builder.set(Task.description, description or "")
        builder.set(Task.updated_at, utcnow())

        with self._transaction("update task"):
            self._execute_update(builder)
            if tags is not UNSET and tags is not None:
                self._replace_tags(task_id, normalize_tags(tags))
        logger.info("updated task %s (%s)", task_id, ", ".join(builder.columns))

    def set_status(self, task_id: int, status: str) -> str:
        validate_status(status)
        builder = UpdateBuilder(task_id).set(Task.status, status).set(Task.updated_at, utcnow())
        with self._transaction("set status"):
            self._execute_update(builder)
        logger.info("task %s status -> %s", task_id, status)
        return status

    def archive(self, task_id: int) -> None:
        builder = UpdateBuilder(task_id).set(Task.archived, True).set(Task.updated_at, utcnow())
        with self._transaction("archive task"):
            self._execute_update(builder)
        logger.info("archived task %s", task_id)

    def restore(self, task_id: int) -> str:
        # le statut repart toujours de Planning
        status = TaskStatus.PLANNING.value
        builder = (
            UpdateBuilder(task_id)
            .set(Task.archived, False)
            .set(Task.status, status)
            .set(Task.updated_at, utcnow())
        )
        with self._transaction("restore task"):
            self._execute_update(builder)
        logger.info("restored task %s", task_id)
        return status

    def duplicate(self, task_id: int) -> int:
        source = self.get(task_id)
        now = utcnow()
        with self._transaction("duplicate task"):
            copy = Task(
                title=source.title,
                description=source.description,
                status=source.status,
                archived=False,
                created_at=now,
                updated_at=now,
            )
            self.db.add(copy)
            self.db.flush()
            new_id = copy.id
            self._insert_tags(new_id, normalize_tags(source.tags))
        logger.info("duplicated task %s -> %s", task_id, new_id)
        return new_id

    def delete(self, task_id: int) -> None:
        # pas de vérif d'existence: supprimer un id absent n'est pas une erreur
        with self._transaction("delete task"):
            deleted = self.db.query(Task).filter(Task.id == task_id).delete(synchronize_session=False)
        logger.info("deleted task %s (%d row)", task_id, deleted)
