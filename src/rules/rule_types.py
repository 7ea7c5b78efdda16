"""
Rule type definitions.

Provides the enums and frozen dataclasses every practice-area catalogue is
built from. Catalogue content is plain data: every TaskDefinition has the
same shape, so there is no class hierarchy here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union


class PracticeAreaId(str, Enum):
    """Closed set of supported practice areas."""
    PERSONAL_INJURY = "personal-injury"
    FAMILY_LAW = "family-law"
    REAL_ESTATE = "real-estate"
    CRIMINAL_DEFENSE = "criminal-defense"


class FieldKind(str, Enum):
    """Data kinds a task form field can hold."""
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    DATE = "date"
    CHECKBOX = "checkbox"
    SELECT = "select"


class TaskStatus(str, Enum):
    """Lifecycle of a persisted task instance."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"


class MatterStatus(str, Enum):
    """Lifecycle of a legal matter."""
    ACTIVE = "active"
    PENDING = "pending"
    CLOSED = "closed"
    ARCHIVED = "archived"


class TimeUnit(str, Enum):
    MONTHS = "months"
    DAYS = "days"


@dataclass(frozen=True)
class FieldSpec:
    """One input on a task form."""
    name: str
    label: str
    kind: FieldKind = FieldKind.TEXT
    required: bool = False
    readonly: bool = False
    options: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.kind == FieldKind.SELECT and not self.options:
            raise ValueError(f"Select field '{self.name}' needs options")
        if self.options and self.kind != FieldKind.SELECT:
            raise ValueError(f"Only select fields take options: '{self.name}'")


@dataclass(frozen=True)
class DeadlineRule:
    """
    Statutory time constraint attached to a task.

    Computable rules carry a non-negative day offset from a named date field
    on the same task. Advisory rules only carry their description (e.g.
    "Within statute of limitations") and are never fed to the deadline
    calculator.
    """
    description: str
    offset_days: Optional[int] = None
    trigger_field: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.offset_days is None) != (self.trigger_field is None):
            raise ValueError("offset_days and trigger_field must be given together")
        if self.offset_days is not None and self.offset_days < 0:
            raise ValueError(f"Deadline offset cannot be negative: {self.offset_days}")

    @classmethod
    def fixed(cls, offset_days: int, trigger_field: str, description: str) -> "DeadlineRule":
        return cls(description=description, offset_days=offset_days, trigger_field=trigger_field)

    @classmethod
    def advisory(cls, description: str) -> "DeadlineRule":
        return cls(description=description)

    @property
    def is_computable(self) -> bool:
        return self.offset_days is not None


@dataclass(frozen=True)
class TaskDefinition:
    """
    Catalogue entry for a practice-area task.

    task_id is a foreign key for persisted task instances. Renaming it is a
    data migration, not an edit.
    """
    task_id: str
    name: str
    description: str
    statute: Optional[str] = None
    deadline: Optional[DeadlineRule] = None
    fields: Tuple[FieldSpec, ...] = ()
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        names = [f.name for f in self.fields]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(f"Task '{self.task_id}' repeats fields: {sorted(duplicates)}")
        if self.deadline is not None and self.deadline.is_computable:
            trigger = self.get_field(self.deadline.trigger_field)
            if trigger is None or trigger.kind != FieldKind.DATE:
                raise ValueError(
                    f"Task '{self.task_id}' deadline trigger "
                    f"'{self.deadline.trigger_field}' is not a date field"
                )

    def get_field(self, name: str) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    @property
    def required_fields(self) -> Tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if f.required)

    @property
    def readonly_fields(self) -> Tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if f.readonly)

    @property
    def has_computable_deadline(self) -> bool:
        return self.deadline is not None and self.deadline.is_computable


# =============================================================================
# Numeric tables
# =============================================================================

@dataclass(frozen=True)
class Bracket:
    """
    One bracket of a flat-rate table.

    max is the next bracket's min; None means unbounded. Whether an amount
    sitting exactly on max belongs here or to the next bracket is a property
    of the table, not the bracket.
    """
    min: Decimal
    max: Optional[Decimal]
    rate: Decimal


@dataclass(frozen=True)
class BracketTable:
    """
    Contiguous flat-rate brackets covering [0, infinity).

    The rate of the single containing bracket applies to the whole amount.
    These are not marginal tables.

    upper_inclusive records the statutory wording at thresholds: True for
    "X or less" (an amount equal to a bracket's max stays in that bracket),
    False for "X or more" (it moves to the next bracket).
    """
    name: str
    brackets: Tuple[Bracket, ...]
    upper_inclusive: bool = False
    citation: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.brackets:
            raise ValueError(f"Bracket table '{self.name}' is empty")
        if self.brackets[0].min != 0:
            raise ValueError(f"Bracket table '{self.name}' must start at 0")
        for lower, upper in zip(self.brackets, self.brackets[1:]):
            if lower.max is None or lower.max != upper.min:
                raise ValueError(f"Bracket table '{self.name}' has a gap or overlap at {lower.max}")
        if self.brackets[-1].max is not None:
            raise ValueError(f"Bracket table '{self.name}' must end unbounded")


@dataclass(frozen=True)
class PercentageSchedule:
    """
    Discrete count -> percentage, e.g. number of children -> CSSA percentage.

    Keys above the highest entry collapse onto it ("5 or more"). Percentages
    are non-decreasing in the key; catalogue authors keep it that way.
    """
    name: str
    rates: Tuple[Tuple[int, Decimal], ...]
    citation: Optional[str] = None

    def __post_init__(self) -> None:
        keys = [k for k, _ in self.rates]
        if not keys:
            raise ValueError(f"Schedule '{self.name}' is empty")
        if keys != sorted(set(keys)):
            raise ValueError(f"Schedule '{self.name}' keys must be unique and ascending")

    @property
    def min_key(self) -> int:
        return self.rates[0][0]

    @property
    def max_key(self) -> int:
        return self.rates[-1][0]

    def as_dict(self) -> Dict[int, Decimal]:
        return dict(self.rates)


@dataclass(frozen=True)
class TimeBudget:
    """Statutory ceiling on chargeable time for one charge category."""
    category: str
    amount: int
    unit: TimeUnit
    label: str = ""


@dataclass(frozen=True)
class TimeBudgetTable:
    name: str
    budgets: Tuple[TimeBudget, ...]
    citation: Optional[str] = None

    def get(self, category: str) -> Optional[TimeBudget]:
        for budget in self.budgets:
            if budget.category == category:
                return budget
        return None


@dataclass(frozen=True)
class LimitationPeriod:
    """Statute of limitations for one claim type."""
    claim_type: str
    years: Decimal
    statute: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class LimitationsTable:
    name: str
    periods: Tuple[LimitationPeriod, ...]

    def get(self, claim_type: str) -> Optional[LimitationPeriod]:
        for period in self.periods:
            if period.claim_type == claim_type:
                return period
        return None


@dataclass(frozen=True)
class DurationGuideline:
    """Advisory duration band: percent-of-length range for a length band."""
    min_years: Decimal
    max_years: Optional[Decimal]
    low_pct: Decimal
    high_pct: Decimal


@dataclass(frozen=True)
class DurationGuidelineTable:
    """Bands are inclusive at their upper edge ("up to and including")."""
    name: str
    bands: Tuple[DurationGuideline, ...]
    citation: Optional[str] = None


@dataclass(frozen=True)
class FactorList:
    """Informational list, e.g. equitable distribution factors."""
    name: str
    factors: Tuple[str, ...]
    citation: Optional[str] = None


CatalogueTable = Union[
    BracketTable,
    PercentageSchedule,
    TimeBudgetTable,
    LimitationsTable,
    DurationGuidelineTable,
    FactorList,
]


@dataclass(frozen=True)
class PracticeArea:
    """A practice area with its ordered tasks and named tables."""
    area_id: PracticeAreaId
    name: str
    tasks: Tuple[TaskDefinition, ...]
    tables: Mapping[str, CatalogueTable] = field(default_factory=dict)

    def __post_init__(self) -> None:
        ids = [t.task_id for t in self.tasks]
        duplicates = {i for i in ids if ids.count(i) > 1}
        if duplicates:
            raise ValueError(f"Practice area '{self.area_id.value}' repeats task ids: {sorted(duplicates)}")
        # Freeze the table mapping; frozen dataclasses need object.__setattr__
        object.__setattr__(self, "tables", MappingProxyType(dict(self.tables)))
