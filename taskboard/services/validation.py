"""Règles de validation des tâches"""

import logging
from typing import Iterable, List, Optional

from taskboard.core.errors import ValidationError
from taskboard.models.task import TaskStatus

logger = logging.getLogger(__name__)

VALID_STATUSES = frozenset(s.value for s in TaskStatus)


def validate_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        logger.debug("rejected blank title %r", title)
        raise ValidationError("title required")
    return title


def validate_status(status: Optional[str]) -> str:
    if status not in VALID_STATUSES:
        logger.debug("rejected status %r", status)
        raise ValidationError(f"invalid status, expected one of {sorted(VALID_STATUSES)}")
    return status


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    # trim, on jette les vides et les doublons (premier vu gardé), pas de minuscules
    if not tags:
        return []
    seen = set()
    normalized = []
    for tag in tags:
        tag = (tag or "").strip()
        if not tag or tag in seen:
            continue
        seen.add(tag)
        normalized.append(tag)
    return normalized
