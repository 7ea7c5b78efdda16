"""
Decimal Math Utilities for Statutory Monetary Calculations.

Transfer taxes, mortgage recording tax and support obligations are all
computed with Decimal so that bracket thresholds compare exactly and
results round to the cent the same way every time.

Why Decimal?
- Float: 500000 * 0.01425 = 7124.999999999999
- Decimal: 500000 * 0.01425 = 7125.00000
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Optional, Union
import logging

from rules.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

# Type alias for values that can be converted to Decimal
Numeric = Union[int, float, str, Decimal]

MONEY_PLACES = Decimal("0.01")  # Round to cents
RATE_PLACES = Decimal("0.00001")  # 1.925% needs five places

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Numeric) -> Decimal:
    """
    Convert a numeric value to Decimal.

    Args:
        value: Value to convert (int, float, str, or Decimal)

    Returns:
        Decimal representation

    Raises:
        InvalidInputError: If the value is not a finite number

    Examples:
        >>> to_decimal(100)
        Decimal('100')
        >>> to_decimal(100.50)
        Decimal('100.5')
        >>> to_decimal("1,250,000")
        Decimal('1250000')
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"Expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        # Convert float to string first to preserve representation
        result = Decimal(str(value))
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", "").lstrip("$")
        try:
            result = Decimal(cleaned)
        except InvalidOperation:
            raise InvalidInputError(f"Expected a number, got {value!r}") from None
    else:
        raise InvalidInputError(f"Expected a number, got {value!r}")

    if not result.is_finite():
        raise InvalidInputError(f"Expected a finite number, got {value!r}")
    return result


def money(value: Numeric) -> Decimal:
    """
    Convert value to money (rounded to cents).

    Examples:
        >>> money(100.999)
        Decimal('101.00')
        >>> money(100.994)
        Decimal('100.99')
    """
    return to_decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def rate(value: Numeric) -> Decimal:
    """
    Convert value to a rate (5 decimal places).

    Examples:
        >>> rate(0.01925)
        Decimal('0.01925')
    """
    return to_decimal(value).quantize(RATE_PLACES, rounding=ROUND_HALF_UP)


def add(*values: Numeric) -> Decimal:
    """
    Add multiple values with Decimal precision.

    Examples:
        >>> add(100.10, 200.20, 300.30)
        Decimal('600.60')
    """
    result = ZERO
    for v in values:
        result += to_decimal(v)
    return result


def multiply(a: Numeric, b: Numeric) -> Decimal:
    return to_decimal(a) * to_decimal(b)


def divide(a: Numeric, b: Numeric, default: Optional[Numeric] = None) -> Decimal:
    """
    Divide a by b with Decimal precision.

    Args:
        a: Dividend
        b: Divisor
        default: Value to return if division by zero (None raises error)

    Raises:
        InvalidOperation: If b is zero and no default provided
    """
    b_dec = to_decimal(b)
    if b_dec == 0:
        if default is not None:
            return to_decimal(default)
        raise InvalidOperation("Division by zero")
    return to_decimal(a) / b_dec


def min_decimal(*values: Numeric) -> Decimal:
    return min(to_decimal(v) for v in values)


def max_decimal(*values: Numeric) -> Decimal:
    return max(to_decimal(v) for v in values)


def format_percentage(value: Numeric, decimal_places: int = 2) -> str:
    """
    Format value as percentage string.

    Examples:
        >>> format_percentage(0.01425, 3)
        '1.425%'
    """
    pct = multiply(value, HUNDRED)
    return f"{pct:.{decimal_places}f}%"
