from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from calculator.deadlines import parse_date
from rules.exceptions import REQUIRED_MESSAGE, InvalidInputError, ValidationIssue
from rules.rule_types import FieldKind, FieldSpec, TaskDefinition

from .field_values import is_empty, parse_checkbox, parse_number

logger = logging.getLogger(__name__)


class FieldValueValidator:
    """
    Checks submitted field values against a task definition.

    Returns every issue in catalogue field order; callers decide whether to
    raise. Read-only fields are computed by the engine and are not checked.
    """

    def validate(self, task: TaskDefinition, field_values: Mapping[str, Any]) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []

        for spec in task.fields:
            if spec.readonly:
                continue
            value = field_values.get(spec.name)

            if is_empty(spec, value):
                if spec.required:
                    issues.append(ValidationIssue(spec.name, REQUIRED_MESSAGE))
                continue

            issue = self._check_kind(spec, value)
            if issue is not None:
                issues.append(issue)

        unknown = sorted(set(field_values) - {f.name for f in task.fields})
        if unknown:
            logger.debug(f"Ignoring fields not on task {task.task_id}: {unknown}")

        return issues

    def _check_kind(self, spec: FieldSpec, value: Any) -> Optional[ValidationIssue]:
        try:
            if spec.kind == FieldKind.NUMBER:
                parse_number(value, spec.name)
            elif spec.kind == FieldKind.DATE:
                parse_date(value, spec.name)
            elif spec.kind == FieldKind.CHECKBOX:
                parse_checkbox(value)
        except InvalidInputError:
            return ValidationIssue(spec.name, _KIND_MESSAGES[spec.kind])

        if spec.kind == FieldKind.SELECT and str(value) not in spec.options:
            return ValidationIssue(spec.name, f"Must be one of: {', '.join(spec.options)}.")
        return None


_KIND_MESSAGES = {
    FieldKind.NUMBER: "Must be a number.",
    FieldKind.DATE: "Must be a valid date (YYYY-MM-DD).",
    FieldKind.CHECKBOX: "Must be checked or unchecked.",
}


def validate_field_values(task: TaskDefinition, field_values: Mapping[str, Any]) -> List[ValidationIssue]:
    """All validation issues for a task's field values, without raising."""
    return FieldValueValidator().validate(task, field_values)
