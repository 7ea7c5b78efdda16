"""
Tiered Monetary Calculator.

Applies the catalogue's flat bracket tables and percentage schedules.

A bracket table here is NOT marginal: the rate of the one bracket that
contains the amount applies to the entire amount. The mansion tax and NYC
real property transfer tax are levied that way, and accumulating across
lower brackets would understate the liability.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from rules.exceptions import InvalidInputError, OutOfRangeError
from rules.rule_types import Bracket, BracketTable, PercentageSchedule

from .decimal_math import Numeric, money, multiply, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BracketResult:
    """Rate of the containing bracket and the resulting amount."""
    rate: Decimal
    computed_amount: Decimal
    bracket: Bracket


def find_bracket(table: BracketTable, amount: Numeric) -> Bracket:
    """
    Find the single bracket containing amount.

    Raises:
        OutOfRangeError: If amount is negative
    """
    value = to_decimal(amount)
    if value < 0:
        raise OutOfRangeError(f"{table.name}: amount {value} is negative; tables start at 0")

    for bracket in table.brackets:
        if bracket.max is None:
            return bracket
        if table.upper_inclusive and value <= bracket.max:
            return bracket
        if not table.upper_inclusive and value < bracket.max:
            return bracket
    # BracketTable guarantees the last bracket is unbounded
    raise OutOfRangeError(f"{table.name}: no bracket contains {value}")


def apply_bracket_table(table: BracketTable, amount: Numeric) -> BracketResult:
    """
    Apply a flat bracket table to an amount.

    Args:
        table: Bracket table from the catalogue
        amount: Non-negative amount (e.g. sale price)

    Returns:
        BracketResult with the bracket's rate and amount * rate rounded to cents

    Raises:
        OutOfRangeError: If amount is negative
        InvalidInputError: If amount is not a number

    Examples:
        >>> from rules.real_estate_rules import MANSION_TAX
        >>> apply_bracket_table(MANSION_TAX, 2_500_000).computed_amount
        Decimal('31250.00')
    """
    bracket = find_bracket(table, amount)
    computed = money(multiply(amount, bracket.rate))
    logger.debug(f"{table.name}: {amount} -> rate {bracket.rate}, amount {computed}")
    return BracketResult(rate=bracket.rate, computed_amount=computed, bracket=bracket)


def apply_percentage_schedule(schedule: PercentageSchedule, key: int) -> Decimal:
    """
    Look up the percentage for a discrete key.

    Keys above the schedule's highest entry take the highest entry ("5 or
    more children"). Keys below the lowest entry are out of domain.

    Raises:
        InvalidInputError: If key is not an integer or is below the minimum key

    Examples:
        >>> from rules.family_law_rules import CSSA_PERCENTAGES
        >>> apply_percentage_schedule(CSSA_PERCENTAGES, 7)
        Decimal('0.35')
    """
    if isinstance(key, bool) or not isinstance(key, int):
        raise InvalidInputError(f"{schedule.name}: key must be an integer, got {key!r}")
    if key < schedule.min_key:
        raise InvalidInputError(
            f"{schedule.name}: key {key} is below the minimum of {schedule.min_key}"
        )
    percentage = schedule.rates[0][1]
    for entry_key, entry_rate in schedule.rates:
        if entry_key > key:
            break
        percentage = entry_rate
    return percentage
