"""
Task Instance Binder.

Binds a catalogue task to a set of field values: validates the answers,
computes the deadline and its risk status against an explicit "now", and
fills the task's read-only fields from the calculators.

resolve_task_view is a pure function. TaskInstanceBinder adds the one
mutating path, writing computed values back to a stored task record.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from audit.audit_models import AuditAction
from audit.audit_recorder import AuditRecorder
from calculator.deadlines import (
    DateInput,
    classify_deadline,
    compute_deadline,
    days_until,
    parse_date,
)
from config.settings import EngineSettings, get_settings
from rules.catalogue import AreaKey, lookup_task
from rules.exceptions import PermissionDeniedError, TaskValidationError
from rules.rule_types import PracticeAreaId, TaskDefinition

from .context import Actor
from .derived_values import compute_derived_values
from .field_values import get_date
from .record_store import TaskRecordStore
from .task_view import DeadlineView, TaskView
from .validation import validate_field_values

logger = logging.getLogger(__name__)


def _deadline_view(
    task: TaskDefinition,
    field_values: Mapping[str, Any],
    now: DateInput,
    window_days: int,
) -> Optional[DeadlineView]:
    rule = task.deadline
    if rule is None:
        return None
    if not rule.is_computable:
        return DeadlineView(description=rule.description)

    view = DeadlineView(
        description=rule.description,
        computable=True,
        offset_days=rule.offset_days,
        trigger_field=rule.trigger_field,
    )
    trigger = get_date(field_values, rule.trigger_field)
    if trigger is None:
        return view

    due = compute_deadline(trigger, rule.offset_days)
    return view.model_copy(update={
        "due_date": due,
        "days_remaining": days_until(due, now),
        "status": classify_deadline(due, now, window_days),
    })


def resolve_task_view(
    practice_area: AreaKey,
    task_id: str,
    field_values: Mapping[str, Any],
    now: DateInput,
    window_days: Optional[int] = None,
) -> TaskView:
    """
    Bind a task definition to field values.

    Args:
        practice_area: Practice area id
        task_id: Task id within the practice area
        field_values: Field name -> submitted value
        now: Reference time for deadline status and elapsed-time defaults
        window_days: Upcoming look-ahead; defaults to settings.upcoming_window_days

    Returns:
        TaskView with the deadline (when computable and its trigger date is
        answered) and the derived read-only values

    Raises:
        NotFoundError: Unknown practice area or task
        TaskValidationError: Required fields empty or values of the wrong kind;
            lists every offending field in catalogue order
        InvalidInputError: Answers that validate individually but cannot be
            combined (e.g. excludable time exceeding elapsed time)
    """
    task = lookup_task(practice_area, task_id)

    errors = [i for i in validate_field_values(task, field_values) if i.severity == "error"]
    if errors:
        logger.debug(f"Validation failed for {task.task_id}: {[i.field for i in errors]}")
        raise TaskValidationError(task.task_id, errors)

    if window_days is None:
        window_days = get_settings().upcoming_window_days

    as_of = parse_date(now, "now")
    area_id = practice_area if isinstance(practice_area, PracticeAreaId) else PracticeAreaId(practice_area)

    return TaskView(
        practice_area=area_id,
        task_id=task.task_id,
        name=task.name,
        description=task.description,
        statute=task.statute,
        notes=task.notes,
        deadline=_deadline_view(task, field_values, now, window_days),
        field_values=dict(field_values),
        derived_values=compute_derived_values(task, field_values, as_of),
        as_of=as_of,
    )


class TaskInstanceBinder:
    """
    Binds persisted task records.

    The record store and audit recorder are injected; the binder owns no
    task state.
    """

    def __init__(
        self,
        store: TaskRecordStore,
        audit_recorder: Optional[AuditRecorder] = None,
        settings: Optional[EngineSettings] = None,
    ):
        self.store = store
        self.audit_recorder = audit_recorder
        self.settings = settings or get_settings()

    def view_instance(self, record_id: str, now: DateInput) -> TaskView:
        """Resolve the view of a stored record without changing it."""
        record = self.store.get(record_id)
        return resolve_task_view(
            record.practice_area,
            record.task_id,
            record.field_values,
            now,
            window_days=self.settings.upcoming_window_days,
        )

    def refresh_instance(self, record_id: str, actor: Actor, now: DateInput) -> TaskView:
        """
        Recompute a stored record's read-only fields and save them.

        Every read-only field of the task is written; one the current answers
        cannot support is stored as None.

        Raises:
            PermissionDeniedError: If the actor's role is below the write threshold
            NotFoundError: Unknown record, or the record's task left the catalogue
            TaskValidationError: The stored values no longer validate
        """
        required = self.settings.min_write_role_level
        if not actor.has_level(required):
            raise PermissionDeniedError(
                f"{actor.role.display_name} (level {actor.level}) cannot update task "
                f"records; level {required} required"
            )

        record = self.store.get(record_id)
        view = resolve_task_view(
            record.practice_area,
            record.task_id,
            record.field_values,
            now,
            window_days=self.settings.upcoming_window_days,
        )
        # Read-only fields the current answers no longer support are cleared
        task = lookup_task(record.practice_area, record.task_id)
        computed = {spec.name: view.derived_values.get(spec.name) for spec in task.readonly_fields}
        changed = sorted(
            name for name, value in computed.items()
            if record.field_values.get(name) != value
        )

        self.store.update(record_id, {"field_values": computed})
        logger.info(f"Refreshed task record {record_id} ({view.task_id}): {changed or 'no changes'}")

        self._audit(
            AuditAction.SAVED,
            "task_data",
            record_id,
            {"task_id": view.task_id, "fields": changed},
            actor,
        )
        return view

    def _audit(
        self,
        action: AuditAction,
        entity_type: str,
        entity_id: str,
        details: Dict[str, Any],
        actor: Actor,
    ) -> None:
        if self.audit_recorder is None:
            return
        try:
            self.audit_recorder.record(
                action,
                entity_type,
                entity_id,
                details,
                user_id=actor.user_id,
                team_id=actor.team_id,
            )
        except Exception:
            logger.exception(f"Audit recording failed for {entity_type} {entity_id}")
