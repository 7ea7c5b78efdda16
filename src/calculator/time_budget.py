"""
Statutory Time-Budget Calculator.

Measures chargeable time against a statutory ceiling such as the CPL §30.30
readiness limits: six months for felonies, 90 days for misdemeanors, 60 days
for violations.

Month-denominated ceilings are converted to days from the anchor date (the
arraignment), so "6 months" from January 1 is 182 days in a leap year and
181 otherwise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rules.catalogue import lookup_table
from rules.exceptions import InvalidInputError, NotFoundError
from rules.rule_types import PracticeAreaId, TimeBudget, TimeUnit

from .deadlines import DateInput, months_to_calendar_days

logger = logging.getLogger(__name__)

SPEEDY_TRIAL_TABLE = "speedy_trial_limits"


@dataclass(frozen=True)
class TimeBudgetResult:
    ceiling_days: int
    chargeable_days: int
    remaining_days: int
    over_budget: bool


def _non_negative_days(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{name} must be a whole number of days, got {value!r}")
    if value < 0:
        raise InvalidInputError(f"{name} cannot be negative: {value}")
    return value


def _evaluate(ceiling_days: int, elapsed_days: int, excludable_days: int) -> TimeBudgetResult:
    elapsed = _non_negative_days(elapsed_days, "elapsed_days")
    excludable = _non_negative_days(excludable_days, "excludable_days")
    if excludable > elapsed:
        raise InvalidInputError(
            f"Excludable time ({excludable} days) cannot exceed elapsed time ({elapsed} days)"
        )

    chargeable = max(0, elapsed - excludable)
    remaining = ceiling_days - chargeable
    return TimeBudgetResult(
        ceiling_days=ceiling_days,
        chargeable_days=chargeable,
        remaining_days=remaining,
        over_budget=remaining < 0,
    )


def remaining_time(
    budget_months: int,
    elapsed_days: int,
    excludable_days: int,
    anchor_date: DateInput,
) -> TimeBudgetResult:
    """
    Evaluate chargeable time against a month-denominated ceiling.

    Args:
        budget_months: Statutory ceiling in calendar months
        elapsed_days: Total calendar days elapsed since the anchor
        excludable_days: Days excluded from the count (defense motions, etc.)
        anchor_date: Start of the period, used to size the months

    Returns:
        TimeBudgetResult

    Raises:
        InvalidInputError: If any input is negative or excludable exceeds elapsed

    Examples:
        >>> remaining_time(6, 200, 20, "2024-01-01").remaining_days
        2
    """
    months = _non_negative_days(budget_months, "budget_months")
    ceiling = months_to_calendar_days(months, anchor_date)
    return _evaluate(ceiling, elapsed_days, excludable_days)


def budget_ceiling_days(budget: TimeBudget, anchor_date: DateInput) -> int:
    """Ceiling of a catalogue TimeBudget in days, from the anchor date."""
    if budget.unit == TimeUnit.MONTHS:
        return months_to_calendar_days(budget.amount, anchor_date)
    return budget.amount


def remaining_time_for_budget(
    budget: TimeBudget,
    elapsed_days: int,
    excludable_days: int,
    anchor_date: DateInput,
) -> TimeBudgetResult:
    """Same as remaining_time, for a catalogue budget in either unit."""
    if budget.unit == TimeUnit.MONTHS:
        return remaining_time(budget.amount, elapsed_days, excludable_days, anchor_date)
    return _evaluate(budget.amount, elapsed_days, excludable_days)


def speedy_trial_budget(charge_type: str) -> TimeBudget:
    """
    Resolve a CPL §30.30 budget by category ("misdemeanor") or by its form
    label ("Misdemeanor (90 days)").

    Raises:
        NotFoundError: If the charge type is unknown
    """
    table = lookup_table(PracticeAreaId.CRIMINAL_DEFENSE, SPEEDY_TRIAL_TABLE)
    budget = table.get(charge_type)
    if budget is not None:
        return budget
    for candidate in table.budgets:
        if candidate.label == charge_type:
            return candidate
    raise NotFoundError("charge type", charge_type, PracticeAreaId.CRIMINAL_DEFENSE.value)
