"""
Field value coercion.

Task forms submit loosely typed values: numbers may arrive as "$1,250.00",
dates as ISO strings, checkboxes as "on". These helpers turn them into
Decimal, date and bool, and decide what counts as an empty answer.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from calculator.decimal_math import to_decimal
from calculator.deadlines import parse_date
from rules.exceptions import InvalidInputError
from rules.rule_types import FieldKind, FieldSpec

TRUE_STRINGS = frozenset({"true", "on", "yes", "1", "checked"})
FALSE_STRINGS = frozenset({"false", "off", "no", "0", ""})


def is_empty(spec: FieldSpec, value: Any) -> bool:
    """
    Whether a value leaves a field unanswered.

    None, empty or whitespace-only strings and an unchecked checkbox are
    empty. Zero is an answer.
    """
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if spec.kind == FieldKind.CHECKBOX:
        try:
            return not parse_checkbox(value)
        except InvalidInputError:
            return False
    return False


def parse_checkbox(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, Decimal)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    raise InvalidInputError(f"Not a checkbox value: {value!r}")


def parse_number(value: Any, field_name: str) -> Decimal:
    try:
        return to_decimal(value)
    except InvalidInputError:
        raise InvalidInputError(f"{field_name}: '{value}' is not a number") from None


def get_number(values: Mapping[str, Any], name: str, default: Optional[Decimal] = None) -> Optional[Decimal]:
    """Numeric field value, or default when unanswered."""
    value = values.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    return parse_number(value, name)


def get_date(values: Mapping[str, Any], name: str) -> Optional[date]:
    value = values.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_date(value, name)


def get_checkbox(values: Mapping[str, Any], name: str) -> bool:
    return parse_checkbox(values.get(name))


def get_text(values: Mapping[str, Any], name: str) -> Optional[str]:
    value = values.get(name)
    if value is None:
        return None
    text = str(value).strip()
    return text or None
