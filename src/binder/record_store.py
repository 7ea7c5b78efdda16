"""
Task record store interface.

Persistence of task instances belongs to the host application. The binder
only needs create/read/update/delete of records holding a task's field
values and status, expressed by TaskRecordStore.

InMemoryTaskRecordStore backs tests and local use.
"""

from __future__ import annotations

import copy
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from rules.exceptions import NotFoundError
from rules.rule_types import PracticeAreaId, TaskStatus

logger = logging.getLogger(__name__)


@dataclass
class TaskRecord:
    """A persisted instance of a catalogue task within a matter."""
    matter_id: str
    practice_area: PracticeAreaId
    task_id: str
    field_values: Dict[str, Any] = field(default_factory=dict)
    status: TaskStatus = TaskStatus.NOT_STARTED
    record_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_by: Optional[str] = None
    updated_at: Optional[datetime] = None


class TaskRecordStore(ABC):
    """
    Task record repository interface.

    Implementations raise NotFoundError for unknown record ids rather than
    returning None from update/delete.
    """

    @abstractmethod
    def create(self, record: TaskRecord) -> TaskRecord:
        """Persist a new record and return the stored copy."""

    @abstractmethod
    def get(self, record_id: str) -> TaskRecord:
        """
        Retrieve a record by id.

        Raises:
            NotFoundError: If no record has that id
        """

    @abstractmethod
    def update(self, record_id: str, updates: Dict[str, Any]) -> TaskRecord:
        """
        Apply updates to a record.

        Args:
            record_id: Record to update
            updates: Attribute name -> new value. A "field_values" entry is
                merged into the existing field values, not replaced.
        """

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """Delete a record. Returns False if it did not exist."""

    @abstractmethod
    def list_for_matter(self, matter_id: str) -> List[TaskRecord]:
        """All records of a matter, oldest first."""


class InMemoryTaskRecordStore(TaskRecordStore):
    """Dictionary-backed store. Returns copies so callers cannot mutate stored state."""

    def __init__(self) -> None:
        self._records: Dict[str, TaskRecord] = {}

    def create(self, record: TaskRecord) -> TaskRecord:
        if record.record_id in self._records:
            raise ValueError(f"Task record {record.record_id} already exists")
        self._records[record.record_id] = copy.deepcopy(record)
        logger.debug(f"Created task record {record.record_id} ({record.task_id})")
        return copy.deepcopy(record)

    def get(self, record_id: str) -> TaskRecord:
        record = self._records.get(record_id)
        if record is None:
            raise NotFoundError("task record", record_id)
        return copy.deepcopy(record)

    def update(self, record_id: str, updates: Dict[str, Any]) -> TaskRecord:
        record = self._records.get(record_id)
        if record is None:
            raise NotFoundError("task record", record_id)

        unknown = set(updates) - {"field_values", "status", "updated_at"}
        if unknown:
            raise ValueError(f"Task record attributes cannot be updated: {sorted(unknown)}")

        for name, value in updates.items():
            if name == "field_values":
                record.field_values.update(value)
            else:
                setattr(record, name, value)
        if "updated_at" not in updates:
            record.updated_at = datetime.now(timezone.utc)
        return copy.deepcopy(record)

    def delete(self, record_id: str) -> bool:
        return self._records.pop(record_id, None) is not None

    def list_for_matter(self, matter_id: str) -> List[TaskRecord]:
        return [copy.deepcopy(r) for r in self._records.values() if r.matter_id == matter_id]
