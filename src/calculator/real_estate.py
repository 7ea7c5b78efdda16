"""
Real estate closing tax calculations.

Transfer taxes (NYS, NYC RPT, mansion tax) for the transfer-tax worksheet
and mortgage recording tax savings for a CEMA.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from rules.catalogue import lookup_table
from rules.exceptions import OutOfRangeError
from rules.rule_types import PracticeAreaId

from .brackets import apply_bracket_table
from .decimal_math import ZERO, Numeric, add, max_decimal, min_decimal, money, multiply, to_decimal

logger = logging.getLogger(__name__)

AREA = PracticeAreaId.REAL_ESTATE


@dataclass(frozen=True)
class TransferTaxBreakdown:
    sale_price: Decimal
    nys_transfer_tax: Decimal
    nyc_rate: Decimal
    nyc_transfer_tax: Decimal
    mansion_rate: Decimal
    mansion_tax: Decimal

    @property
    def seller_total(self) -> Decimal:
        """Transfer taxes customarily paid by the seller."""
        return add(self.nys_transfer_tax, self.nyc_transfer_tax)

    @property
    def total(self) -> Decimal:
        return add(self.nys_transfer_tax, self.nyc_transfer_tax, self.mansion_tax)


def calculate_transfer_taxes(
    sale_price: Numeric,
    is_nyc: bool = True,
    is_residential: bool = True,
) -> TransferTaxBreakdown:
    """
    Calculate the transfer taxes on a conveyance.

    Args:
        sale_price: Consideration for the conveyance
        is_nyc: Property is in New York City (NYC RPT and tiered mansion tax apply)
        is_residential: 1-3 family house, condo or co-op unit (mansion tax applies)

    Returns:
        TransferTaxBreakdown

    Raises:
        OutOfRangeError: If sale_price is negative
    """
    price = to_decimal(sale_price)

    nys = apply_bracket_table(lookup_table(AREA, "nys_transfer_tax"), price)

    nyc_rate = nyc_tax = ZERO
    if is_nyc:
        table_name = "nyc_transfer_tax_residential" if is_residential else "nyc_transfer_tax_commercial"
        nyc = apply_bracket_table(lookup_table(AREA, table_name), price)
        nyc_rate, nyc_tax = nyc.rate, nyc.computed_amount

    mansion_rate = mansion_tax = ZERO
    if is_residential:
        table_name = "mansion_tax" if is_nyc else "mansion_tax_outside_nyc"
        mansion = apply_bracket_table(lookup_table(AREA, table_name), price)
        mansion_rate, mansion_tax = mansion.rate, mansion.computed_amount

    return TransferTaxBreakdown(
        sale_price=price,
        nys_transfer_tax=nys.computed_amount,
        nyc_rate=nyc_rate,
        nyc_transfer_tax=nyc_tax,
        mansion_rate=mansion_rate,
        mansion_tax=mansion_tax,
    )


@dataclass(frozen=True)
class CemaSavings:
    existing_mortgage: Decimal
    new_mortgage: Decimal
    gap_amount: Decimal
    rate: Decimal
    tax_on_gap: Decimal
    mortgage_tax_savings: Decimal


def calculate_cema_savings(existing_mortgage: Numeric, new_mortgage: Numeric) -> CemaSavings:
    """
    Mortgage recording tax under a CEMA.

    Only the gap (new loan minus the assigned existing loan) is taxed; the
    savings are the tax that would otherwise be due on the assigned amount.
    The NYC rate is chosen by the size of the new mortgage.

    Raises:
        OutOfRangeError: If either amount is negative
    """
    existing = to_decimal(existing_mortgage)
    new = to_decimal(new_mortgage)
    if existing < 0 or new < 0:
        raise OutOfRangeError("Mortgage amounts cannot be negative")

    table = lookup_table(AREA, "nyc_mortgage_recording_tax")
    mortgage_rate = apply_bracket_table(table, new).rate

    gap = max_decimal(ZERO, new - existing)
    assigned = min_decimal(existing, new)
    return CemaSavings(
        existing_mortgage=existing,
        new_mortgage=new,
        gap_amount=money(gap),
        rate=mortgage_rate,
        tax_on_gap=money(multiply(gap, mortgage_rate)),
        mortgage_tax_savings=money(multiply(assigned, mortgage_rate)),
    )
