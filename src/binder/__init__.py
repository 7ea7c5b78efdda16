"""
Task Instance Binder.

Resolves a catalogue task against submitted field values and an explicit
"now": validation, deadline status and the read-only values computed by the
calculators.
"""

from .context import ROLE_LEVELS, Actor, Role
from .derived_values import DerivedValueRegistry, compute_derived_values, derives
from .record_store import InMemoryTaskRecordStore, TaskRecord, TaskRecordStore
from .task_binder import TaskInstanceBinder, resolve_task_view
from .task_view import DeadlineView, TaskView
from .validation import FieldValueValidator, validate_field_values

__all__ = [
    "ROLE_LEVELS",
    "Actor",
    "Role",
    "DerivedValueRegistry",
    "compute_derived_values",
    "derives",
    "InMemoryTaskRecordStore",
    "TaskRecord",
    "TaskRecordStore",
    "TaskInstanceBinder",
    "resolve_task_view",
    "DeadlineView",
    "TaskView",
    "FieldValueValidator",
    "validate_field_values",
]
