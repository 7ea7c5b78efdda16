"""
Rule catalogue query surface.

The catalogue is built once at import time from the per-area rule modules
and never mutated afterwards, so it is safe to share between any number of
concurrent readers.

Unknown practice areas, task ids and table names raise NotFoundError rather
than returning an empty value, so a typo'd id in a calling form surfaces
immediately.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Tuple, Union

from .criminal_defense_rules import CRIMINAL_DEFENSE
from .exceptions import NotFoundError
from .family_law_rules import FAMILY_LAW
from .personal_injury_rules import PERSONAL_INJURY
from .real_estate_rules import REAL_ESTATE
from .rule_types import CatalogueTable, PracticeArea, PracticeAreaId, TaskDefinition

logger = logging.getLogger(__name__)

AreaKey = Union[str, PracticeAreaId]

PRACTICE_AREAS: Mapping[PracticeAreaId, PracticeArea] = MappingProxyType({
    area.area_id: area
    for area in (PERSONAL_INJURY, FAMILY_LAW, REAL_ESTATE, CRIMINAL_DEFENSE)
})


def _area_id(practice_area: AreaKey) -> PracticeAreaId:
    if isinstance(practice_area, PracticeAreaId):
        return practice_area
    try:
        return PracticeAreaId(practice_area)
    except ValueError:
        raise NotFoundError("practice area", str(practice_area)) from None


def get_practice_area(practice_area: AreaKey) -> PracticeArea:
    """Return the practice area, or raise NotFoundError."""
    area_id = _area_id(practice_area)
    area = PRACTICE_AREAS.get(area_id)
    if area is None:
        raise NotFoundError("practice area", area_id.value)
    return area


def list_practice_areas() -> Tuple[PracticeArea, ...]:
    return tuple(PRACTICE_AREAS.values())


def list_tasks(practice_area: AreaKey) -> Tuple[TaskDefinition, ...]:
    """All tasks of a practice area, in catalogue order."""
    return get_practice_area(practice_area).tasks


def lookup_task(practice_area: AreaKey, task_id: str) -> TaskDefinition:
    """
    Find a task definition by id.

    Args:
        practice_area: Practice area id (e.g. "personal-injury")
        task_id: Task id within that area (e.g. "pi-notice-of-claim")

    Returns:
        The TaskDefinition

    Raises:
        NotFoundError: If the area or the task id is unknown
    """
    area = get_practice_area(practice_area)
    for task in area.tasks:
        if task.task_id == task_id:
            return task
    logger.debug(f"Task lookup miss: {area.area_id.value}/{task_id}")
    raise NotFoundError("task", task_id, area.area_id.value)


def lookup_table(practice_area: AreaKey, table_name: str) -> CatalogueTable:
    """
    Find a named numeric or informational table of a practice area.

    Raises:
        NotFoundError: If the area or the table name is unknown
    """
    area = get_practice_area(practice_area)
    table = area.tables.get(table_name)
    if table is None:
        raise NotFoundError("table", table_name, area.area_id.value)
    return table


def find_computable_tasks(practice_area: AreaKey) -> Tuple[TaskDefinition, ...]:
    """Tasks whose deadline rule has a fixed day offset."""
    return tuple(t for t in list_tasks(practice_area) if t.has_computable_deadline)
