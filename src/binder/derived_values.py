"""
Derived (read-only) field values.

Some catalogue tasks carry read-only fields the engine fills from the other
answers: transfer taxes from the sale price, the CSSA obligation from the
parents' incomes, the speedy-trial clock from the arraignment date. Each task
with such fields registers one deriver here.

A deriver receives already validated field values and the caller's "now",
and returns only the values it could compute; a missing optional input
leaves the corresponding read-only field out.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional

from calculator.deadlines import statute_of_limitations_expiry
from calculator.family_support import (
    calculate_child_support,
    calculate_maintenance_guideline,
    maintenance_duration_range,
)
from calculator.real_estate import calculate_cema_savings, calculate_transfer_taxes
from calculator.time_budget import remaining_time_for_budget, speedy_trial_budget
from rules.catalogue import lookup_table
from rules.exceptions import InvalidInputError, NotFoundError
from rules.rule_types import PracticeAreaId, TaskDefinition

from .field_values import get_checkbox, get_date, get_number, get_text

logger = logging.getLogger(__name__)

Deriver = Callable[[Mapping[str, Any], date], Dict[str, Any]]


class DerivedValueRegistry:
    """Task id -> deriver."""

    _derivers: Dict[str, Deriver] = {}

    @classmethod
    def register(cls, task_id: str, deriver: Deriver) -> None:
        cls._derivers[task_id] = deriver

    @classmethod
    def get(cls, task_id: str) -> Optional[Deriver]:
        return cls._derivers.get(task_id)

    @classmethod
    def task_ids(cls) -> List[str]:
        return sorted(cls._derivers)


def derives(task_id: str) -> Callable[[Deriver], Deriver]:
    """
    Decorator to register the deriver of a task's read-only fields.

    Usage:
        @derives("re-cema")
        def _cema(values, now):
            ...
    """
    def decorator(fn: Deriver) -> Deriver:
        DerivedValueRegistry.register(task_id, fn)
        return fn
    return decorator


def compute_derived_values(task: TaskDefinition, field_values: Mapping[str, Any], now: date) -> Dict[str, Any]:
    """Read-only field values for a task; empty when the task has none."""
    deriver = DerivedValueRegistry.get(task.task_id)
    if deriver is None:
        return {}
    derived = deriver(field_values, now)
    unknown = [name for name in derived if task.get_field(name) is None]
    if unknown:
        raise ValueError(f"Deriver for {task.task_id} produced fields not on the task: {unknown}")
    logger.debug(f"Derived {sorted(derived)} for {task.task_id}")
    return derived


def _whole_days(value: Optional[Decimal], name: str) -> Optional[int]:
    if value is None:
        return None
    if value != value.to_integral_value():
        raise InvalidInputError(f"{name} must be a whole number of days, got {value}")
    return int(value)


# =============================================================================
# Real estate
# =============================================================================

@derives("re-transfer-taxes")
def _transfer_taxes(values: Mapping[str, Any], now: date) -> Dict[str, Any]:
    sale_price = get_number(values, "sale_price")
    if sale_price is None:
        return {}
    taxes = calculate_transfer_taxes(
        sale_price,
        is_nyc=get_checkbox(values, "is_nyc"),
        is_residential=get_checkbox(values, "is_residential"),
    )
    return {
        "nys_transfer_tax": taxes.nys_transfer_tax,
        "nyc_transfer_tax": taxes.nyc_transfer_tax,
        "mansion_tax": taxes.mansion_tax,
    }


@derives("re-cema")
def _cema(values: Mapping[str, Any], now: date) -> Dict[str, Any]:
    existing = get_number(values, "existing_mortgage")
    new = get_number(values, "new_mortgage")
    if existing is None or new is None:
        return {}
    savings = calculate_cema_savings(existing, new)
    return {
        "gap_amount": savings.gap_amount,
        "mortgage_tax_savings": savings.mortgage_tax_savings,
    }


# =============================================================================
# Family law
# =============================================================================

def _children_count(option: Optional[str]) -> Optional[int]:
    # Select options are "1".."4" and "5+"
    if option is None:
        return None
    try:
        return int(option.rstrip("+"))
    except ValueError:
        raise InvalidInputError(f"num_children: '{option}' is not a number of children") from None


@derives("fl-child-support")
def _child_support(values: Mapping[str, Any], now: date) -> Dict[str, Any]:
    cp_income = get_number(values, "cp_income")
    ncp_income = get_number(values, "ncp_income")
    children = _children_count(get_text(values, "num_children"))
    if cp_income is None or ncp_income is None or children is None:
        return {}

    zero = Decimal("0")
    support = calculate_child_support(
        cp_income,
        ncp_income,
        children,
        fica_cp=get_number(values, "fica_cp", zero),
        fica_ncp=get_number(values, "fica_ncp", zero),
        childcare_costs=get_number(values, "childcare_costs", zero),
        health_insurance=get_number(values, "health_insurance", zero),
        educational_expenses=get_number(values, "educational_expenses", zero),
    )
    return {"ncp_annual_obligation": support.ncp_annual_obligation}


POST_DIVORCE = "Post-divorce"


@derives("fl-maintenance")
def _maintenance(values: Mapping[str, Any], now: date) -> Dict[str, Any]:
    derived: Dict[str, Any] = {}

    payor_income = get_number(values, "payor_income")
    payee_income = get_number(values, "payee_income")
    if payor_income is not None and payee_income is not None:
        child_support = get_number(values, "child_support_paid", Decimal("0"))
        guideline = calculate_maintenance_guideline(payor_income, payee_income, child_support > 0)
        derived["guideline_maintenance"] = guideline.annual_amount

    # Temporary maintenance runs until judgment; duration only applies post-divorce
    years = get_number(values, "marriage_length")
    if years is not None and get_text(values, "pre_post_divorce") == POST_DIVORCE:
        derived["advisory_duration"] = maintenance_duration_range(years).describe()
    return derived


# =============================================================================
# Criminal defense
# =============================================================================

@derives("cd-speedy-trial")
def _speedy_trial(values: Mapping[str, Any], now: date) -> Dict[str, Any]:
    charge_type = get_text(values, "charge_type")
    arraignment = get_date(values, "arraignment_date")
    if charge_type is None or arraignment is None:
        return {}

    budget = speedy_trial_budget(charge_type)
    elapsed = _whole_days(get_number(values, "total_time"), "total_time")
    if elapsed is None:
        # Count calendar days from arraignment up to now
        elapsed = max(0, (now - arraignment).days)
    excludable = _whole_days(get_number(values, "excludable_time"), "excludable_time") or 0

    result = remaining_time_for_budget(budget, elapsed, excludable, arraignment)
    return {
        "chargeable_time": result.chargeable_days,
        "time_remaining": result.remaining_days,
    }


# =============================================================================
# Personal injury
# =============================================================================

@derives("pi-summons-complaint")
def _limitations(values: Mapping[str, Any], now: date) -> Dict[str, Any]:
    claim_type = get_text(values, "claim_type")
    accrual = get_date(values, "accrual_date")
    if claim_type is None or accrual is None:
        return {}

    period = lookup_table(PracticeAreaId.PERSONAL_INJURY, "statutes_of_limitation").get(claim_type)
    if period is None:
        raise NotFoundError("claim type", claim_type, PracticeAreaId.PERSONAL_INJURY.value)
    return {"limitations_expiry": statute_of_limitations_expiry(accrual, period.years)}
