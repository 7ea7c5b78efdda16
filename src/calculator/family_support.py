"""
Family law support calculations.

Child Support Standards Act basic obligation (DRL §240(1-b)), guideline
maintenance (DRL §236(B)(6)(c)) and the advisory maintenance duration
range (DRL §236(B)(6)(f)).

The CSSA and maintenance income caps change periodically; they are read
from the statutory parameter file for the configured year unless passed in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from config.legal_parameters_loader import get_legal_parameter
from config.settings import get_settings
from rules.catalogue import lookup_table
from rules.exceptions import InvalidInputError, OutOfRangeError
from rules.rule_types import PracticeAreaId

from .brackets import apply_percentage_schedule
from .decimal_math import (
    ZERO,
    Numeric,
    add,
    divide,
    format_percentage,
    max_decimal,
    min_decimal,
    money,
    multiply,
    rate,
    to_decimal,
)

logger = logging.getLogger(__name__)

AREA = PracticeAreaId.FAMILY_LAW

YEAR_PLACES = Decimal("0.1")


@dataclass(frozen=True)
class ChildSupportBreakdown:
    combined_income: Decimal
    income_cap: Decimal
    capped_income: Decimal
    percentage: Decimal
    basic_obligation: Decimal
    ncp_share: Decimal
    ncp_basic_obligation: Decimal
    add_ons: Decimal
    ncp_add_ons: Decimal

    @property
    def ncp_annual_obligation(self) -> Decimal:
        return money(add(self.ncp_basic_obligation, self.ncp_add_ons))

    @property
    def ncp_monthly_obligation(self) -> Decimal:
        return money(divide(self.ncp_annual_obligation, 12))


def _non_negative(value: Numeric, name: str) -> Decimal:
    amount = to_decimal(value)
    if amount < 0:
        raise OutOfRangeError(f"{name} cannot be negative: {amount}")
    return amount


def calculate_child_support(
    cp_income: Numeric,
    ncp_income: Numeric,
    num_children: int,
    fica_cp: Numeric = 0,
    fica_ncp: Numeric = 0,
    childcare_costs: Numeric = 0,
    health_insurance: Numeric = 0,
    educational_expenses: Numeric = 0,
    income_cap: Optional[Numeric] = None,
    parameter_year: Optional[int] = None,
) -> ChildSupportBreakdown:
    """
    Calculate the non-custodial parent's CSSA obligation.

    Steps:
    1. Each parent's income is gross income less FICA.
    2. Combined income up to the cap is multiplied by the child percentage.
    3. The non-custodial parent pays their pro-rata share of that basic
       obligation and of the add-ons (childcare, health insurance, education).

    Income above the cap is left to the court's discretion and is not
    included here.

    Args:
        cp_income: Custodial parent gross income
        ncp_income: Non-custodial parent gross income
        num_children: Number of children (5 or more all use the 5-child rate)
        income_cap: Combined income cap; defaults to the configured year's cap

    Raises:
        OutOfRangeError: For negative amounts
        InvalidInputError: For fewer than one child
    """
    cp_net = max_decimal(ZERO, _non_negative(cp_income, "cp_income") - _non_negative(fica_cp, "fica_cp"))
    ncp_net = max_decimal(ZERO, _non_negative(ncp_income, "ncp_income") - _non_negative(fica_ncp, "fica_ncp"))

    if income_cap is None:
        year = parameter_year or get_settings().parameter_year
        income_cap = get_legal_parameter("cssa_income_cap", year)
    cap = _non_negative(income_cap, "income_cap")

    schedule = lookup_table(AREA, "cssa_percentages")
    percentage = apply_percentage_schedule(schedule, num_children)

    combined = add(cp_net, ncp_net)
    capped = min_decimal(combined, cap)
    basic = money(multiply(capped, percentage))
    share = rate(divide(ncp_net, combined, default=0))

    add_ons = add(
        _non_negative(childcare_costs, "childcare_costs"),
        _non_negative(health_insurance, "health_insurance"),
        _non_negative(educational_expenses, "educational_expenses"),
    )

    breakdown = ChildSupportBreakdown(
        combined_income=money(combined),
        income_cap=money(cap),
        capped_income=money(capped),
        percentage=percentage,
        basic_obligation=basic,
        ncp_share=share,
        ncp_basic_obligation=money(multiply(basic, share)),
        add_ons=money(add_ons),
        ncp_add_ons=money(multiply(add_ons, share)),
    )
    logger.debug(
        f"CSSA: combined {breakdown.combined_income}, {num_children} children at "
        f"{format_percentage(percentage, 0)}, NCP share {breakdown.ncp_share}"
    )
    return breakdown


@dataclass(frozen=True)
class MaintenanceDuration:
    marriage_years: Decimal
    low_pct: Decimal
    high_pct: Decimal
    low_years: Decimal
    high_years: Decimal

    def describe(self) -> str:
        return (
            f"{self.low_years} to {self.high_years} years "
            f"({format_percentage(self.low_pct, 0)}-{format_percentage(self.high_pct, 0)} "
            f"of {self.marriage_years} year marriage)"
        )


def maintenance_duration_range(marriage_years: Numeric) -> MaintenanceDuration:
    """
    Advisory post-divorce maintenance duration.

    Length bands are inclusive at the top: a 15 year marriage falls in the
    0-15 band (15%-30%), a 15.5 year marriage in the 15-20 band.

    Raises:
        InvalidInputError: If marriage_years is negative
    """
    years = to_decimal(marriage_years)
    if years < 0:
        raise InvalidInputError(f"Marriage length cannot be negative: {years}")

    table = lookup_table(AREA, "maintenance_duration")
    band = table.bands[-1]
    for candidate in table.bands:
        if candidate.max_years is None or years <= candidate.max_years:
            band = candidate
            break

    return MaintenanceDuration(
        marriage_years=years,
        low_pct=band.low_pct,
        high_pct=band.high_pct,
        low_years=multiply(years, band.low_pct).quantize(YEAR_PLACES, rounding=ROUND_HALF_UP),
        high_years=multiply(years, band.high_pct).quantize(YEAR_PLACES, rounding=ROUND_HALF_UP),
    )


# DRL §236(B)(6)(c): (payor %, payee %) with and without child support
MAINTENANCE_RATES_WITH_CHILD_SUPPORT = (Decimal("0.20"), Decimal("0.25"))
MAINTENANCE_RATES_WITHOUT_CHILD_SUPPORT = (Decimal("0.30"), Decimal("0.20"))
MAINTENANCE_COMBINED_CEILING = Decimal("0.40")


@dataclass(frozen=True)
class MaintenanceGuideline:
    payor_income: Decimal
    payee_income: Decimal
    income_cap: Decimal
    capped_payor_income: Decimal
    child_support_paid: bool
    formula_amount: Decimal
    ceiling_amount: Decimal
    annual_amount: Decimal

    @property
    def monthly_amount(self) -> Decimal:
        return money(divide(self.annual_amount, 12))


def calculate_maintenance_guideline(
    payor_income: Numeric,
    payee_income: Numeric,
    child_support_paid: bool = False,
    income_cap: Optional[Numeric] = None,
    parameter_year: Optional[int] = None,
) -> MaintenanceGuideline:
    """
    Guideline maintenance on income up to the cap (DRL §236(B)(6)(c)).

    1. Payor income is capped at the maintenance income cap.
    2. With child support: 20% of payor income less 25% of payee income.
       Without: 30% of payor income less 20% of payee income.
    3. 40% of combined income less the payee's income.
    4. The award is the lower of 2 and 3, never below zero.

    The same formula sets temporary maintenance (DRL §236(B)(5-a)).

    Args:
        payor_income: Income of the spouse with the higher income
        payee_income: Income of the other spouse
        child_support_paid: The payor also pays child support for children of the marriage
        income_cap: Payor income cap; defaults to the configured year's cap

    Raises:
        OutOfRangeError: For negative amounts
    """
    payor = _non_negative(payor_income, "payor_income")
    payee = _non_negative(payee_income, "payee_income")

    if income_cap is None:
        year = parameter_year or get_settings().parameter_year
        income_cap = get_legal_parameter("maintenance_income_cap", year)
    cap = _non_negative(income_cap, "income_cap")

    capped_payor = min_decimal(payor, cap)
    if child_support_paid:
        payor_pct, payee_pct = MAINTENANCE_RATES_WITH_CHILD_SUPPORT
    else:
        payor_pct, payee_pct = MAINTENANCE_RATES_WITHOUT_CHILD_SUPPORT

    formula = multiply(capped_payor, payor_pct) - multiply(payee, payee_pct)
    ceiling = multiply(add(capped_payor, payee), MAINTENANCE_COMBINED_CEILING) - payee

    guideline = MaintenanceGuideline(
        payor_income=money(payor),
        payee_income=money(payee),
        income_cap=money(cap),
        capped_payor_income=money(capped_payor),
        child_support_paid=child_support_paid,
        formula_amount=money(formula),
        ceiling_amount=money(ceiling),
        annual_amount=money(max_decimal(ZERO, min_decimal(formula, ceiling))),
    )
    logger.debug(
        f"Maintenance: payor {guideline.capped_payor_income} (cap {guideline.income_cap}), "
        f"payee {guideline.payee_income}, award {guideline.annual_amount}"
    )
    return guideline
