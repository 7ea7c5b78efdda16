"""
Practice-Area Rule Catalogue.

Static registry of New York practice-area tasks (governing statute, deadline
rule, form fields, guidance notes) and the numeric tables those tasks refer
to: transfer and mansion tax brackets, the CSSA percentage schedule,
speedy-trial budgets and statutes of limitation.
"""

from .catalogue import (
    PRACTICE_AREAS,
    find_computable_tasks,
    get_practice_area,
    list_practice_areas,
    list_tasks,
    lookup_table,
    lookup_task,
)
from .exceptions import (
    InvalidInputError,
    LegalEngineError,
    NotFoundError,
    OutOfRangeError,
    PermissionDeniedError,
    TaskValidationError,
    ValidationIssue,
)
from .rule_types import (
    Bracket,
    BracketTable,
    DeadlineRule,
    FieldKind,
    FieldSpec,
    MatterStatus,
    PercentageSchedule,
    PracticeArea,
    PracticeAreaId,
    TaskDefinition,
    TaskStatus,
    TimeBudget,
    TimeUnit,
)

__all__ = [
    'PRACTICE_AREAS',
    'find_computable_tasks',
    'get_practice_area',
    'list_practice_areas',
    'list_tasks',
    'lookup_table',
    'lookup_task',
    'InvalidInputError',
    'LegalEngineError',
    'NotFoundError',
    'OutOfRangeError',
    'PermissionDeniedError',
    'TaskValidationError',
    'ValidationIssue',
    'Bracket',
    'BracketTable',
    'DeadlineRule',
    'FieldKind',
    'FieldSpec',
    'MatterStatus',
    'PercentageSchedule',
    'PracticeArea',
    'PracticeAreaId',
    'TaskDefinition',
    'TaskStatus',
    'TimeBudget',
    'TimeUnit',
]
