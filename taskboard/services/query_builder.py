"""Construction des filtres de recherche, de la pagination et des UPDATE partiels."""

from typing import Any, List, Optional, Union

from sqlalchemy import or_, select, update

from taskboard.core.config import settings
from taskboard.models.task import Task, TaskTag

DEFAULT_PAGE = 1

# plus grand entier accepté par SQLite (INTEGER signé 64 bits)
MAX_SQL_INT = 2**63 - 1


def _parse_positive_int(raw: Union[str, int, None]) -> Optional[int]:
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    raw = raw.strip()
    # isdigit() accepte "²", que int() refuse
    if not (raw.isascii() and raw.isdecimal()):
        return None
    # au-delà de 19 chiffres on dépasse un entier 64 bits
    if len(raw) > 19:
        return None
    return int(raw)


def parse_page(raw: Union[str, int, None]) -> int:
    value = _parse_positive_int(raw)
    # l'offset (page - 1) * page_size doit tenir dans un INTEGER SQLite
    if value is None or value < 1 or value > MAX_SQL_INT // settings.MAX_PAGE_SIZE:
        return DEFAULT_PAGE
    return value


def parse_page_size(raw: Union[str, int, None]) -> int:
    # hors bornes ou illisible -> valeur par défaut, jamais d'erreur
    value = _parse_positive_int(raw)
    if value is None or value < 1 or value > settings.MAX_PAGE_SIZE:
        return settings.DEFAULT_PAGE_SIZE
    return value


class Pagination:
    def __init__(self, page: Union[str, int, None] = None, page_size: Union[str, int, None] = None):
        self.page = parse_page(page)
        self.page_size = parse_page_size(page_size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    def has_more(self, returned: int, total: int) -> bool:
        return self.offset + returned < total


def search_filter(q: Optional[str]):
    """Critère "q dans titre OU description OU un des tags", ou None si q est vide.

    Les jokers LIKE (% et _) présents dans q sont échappés.
    """
    q = (q or "").strip()
    if not q:
        return None
    tagged = select(TaskTag.task_id).where(
        TaskTag.tag.contains(q, autoescape=True)
    )
    return or_(
        Task.title.contains(q, autoescape=True),
        Task.description.contains(q, autoescape=True),
        Task.id.in_(tagged),
    )


def archived_filters(q: Optional[str]) -> List[Any]:
    filters = [Task.archived == True]  # noqa: E712
    criterion = search_filter(q)
    if criterion is not None:
        filters.append(criterion)
    return filters


class UpdateBuilder:
    """Accumule des paires (colonne, valeur) et produit un seul UPDATE paramétré."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        self._values = {}

    def set(self, column, value) -> "UpdateBuilder":
        self._values[column.key] = value
        return self

    @property
    def columns(self) -> List[str]:
        return list(self._values)

    def build(self):
        if not self._values:
            raise ValueError("nothing to update")
        return update(Task).where(Task.id == self.task_id).values(**self._values)
