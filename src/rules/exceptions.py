"""
Error types raised by the legal rules engine.

Every error here is locally recoverable by the caller: re-prompt for input,
show a catalogue-missing notice, or render the list of validation issues.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

REQUIRED_MESSAGE = "This field is required."


class LegalEngineError(Exception):
    """Base class for all engine errors."""


class NotFoundError(LegalEngineError, LookupError):
    """Unknown practice area, task id, table name or parameter."""

    def __init__(self, kind: str, key: str, practice_area: Optional[str] = None):
        self.kind = kind
        self.key = key
        self.practice_area = practice_area
        where = f" in practice area '{practice_area}'" if practice_area else ""
        super().__init__(f"Unknown {kind} '{key}'{where}")


class InvalidInputError(LegalEngineError, ValueError):
    """Malformed date, negative day count, or out-of-domain key."""


class OutOfRangeError(InvalidInputError):
    """Amount outside the domain a table is defined for."""


class PermissionDeniedError(LegalEngineError):
    """Actor's role level is too low for the requested operation."""


@dataclass
class ValidationIssue:
    field: str
    message: str
    severity: str = "error"  # "error" | "warning"


class TaskValidationError(LegalEngineError):
    """
    Field values for a task failed validation.

    Carries every issue found, not just the first, so a form can show all
    problems at once.
    """

    def __init__(self, task_id: str, issues: List[ValidationIssue]):
        self.task_id = task_id
        self.issues = list(issues)
        names = ", ".join(self.fields)
        super().__init__(f"Task '{task_id}' has invalid or missing fields: {names}")

    @property
    def fields(self) -> List[str]:
        return [issue.field for issue in self.issues]

    @property
    def missing_fields(self) -> List[str]:
        return [issue.field for issue in self.issues if issue.message == REQUIRED_MESSAGE]

