"""
Task view value objects.

A TaskView is the read-only result of binding a catalogue task to one set
of field values at a given "now". It carries no identity of its own; the
persisted task instance is owned by the record store.
"""

from datetime import date
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from calculator.deadlines import DeadlineStatus
from rules.rule_types import PracticeAreaId


class DeadlineView(BaseModel):
    """Deadline rule of a task, with its computed due date when available."""
    model_config = ConfigDict(frozen=True)

    description: str = Field(description="Human-readable rule, e.g. '90 days from date of incident'")
    computable: bool = Field(default=False, description="Rule has a fixed day offset")
    offset_days: Optional[int] = Field(default=None, description="Day offset from the trigger field")
    trigger_field: Optional[str] = Field(default=None, description="Date field the offset runs from")
    due_date: Optional[date] = Field(default=None, description="Computed due date")
    days_remaining: Optional[int] = Field(default=None, description="Whole days from now until due")
    status: Optional[DeadlineStatus] = Field(default=None, description="Upcoming, passed or safe")


class TaskView(BaseModel):
    """Catalogue task bound to field values."""
    model_config = ConfigDict(frozen=True)

    practice_area: PracticeAreaId
    task_id: str
    name: str
    description: str
    statute: Optional[str] = None
    notes: Optional[str] = None

    deadline: Optional[DeadlineView] = None
    field_values: Mapping[str, Any] = Field(
        default_factory=dict,
        validate_default=True,
        description="Submitted values, as given",
    )
    derived_values: Mapping[str, Any] = Field(
        default_factory=dict,
        validate_default=True,
        description="Engine-computed values for read-only fields",
    )
    as_of: date = Field(description="The 'now' the view was computed against")

    @field_validator("field_values", "derived_values")
    @classmethod
    def _read_only_mapping(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @field_serializer("field_values", "derived_values")
    def _serialize_mapping(self, value: Mapping[str, Any]) -> dict:
        return dict(value)

    @property
    def has_deadline(self) -> bool:
        return self.deadline is not None and self.deadline.due_date is not None

    def value(self, name: str) -> Any:
        """Derived value if the engine computed one, else the submitted value."""
        if name in self.derived_values:
            return self.derived_values[name]
        return self.field_values.get(name)
