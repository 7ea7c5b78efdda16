from .deadlines import (
    DEFAULT_UPCOMING_WINDOW_DAYS,
    DeadlineStatus,
    add_months,
    classify_deadline,
    compute_deadline,
    days_until,
    months_to_calendar_days,
    parse_date,
    statute_of_limitations_expiry,
)
from .brackets import BracketResult, apply_bracket_table, apply_percentage_schedule, find_bracket
from .time_budget import (
    TimeBudgetResult,
    budget_ceiling_days,
    remaining_time,
    remaining_time_for_budget,
    speedy_trial_budget,
)
from .real_estate import CemaSavings, TransferTaxBreakdown, calculate_cema_savings, calculate_transfer_taxes
from .family_support import (
    ChildSupportBreakdown,
    MaintenanceDuration,
    MaintenanceGuideline,
    calculate_child_support,
    calculate_maintenance_guideline,
    maintenance_duration_range,
)

__all__ = [
    "DEFAULT_UPCOMING_WINDOW_DAYS",
    "DeadlineStatus",
    "add_months",
    "classify_deadline",
    "compute_deadline",
    "days_until",
    "months_to_calendar_days",
    "parse_date",
    "statute_of_limitations_expiry",
    "BracketResult",
    "apply_bracket_table",
    "apply_percentage_schedule",
    "find_bracket",
    "TimeBudgetResult",
    "budget_ceiling_days",
    "remaining_time",
    "remaining_time_for_budget",
    "speedy_trial_budget",
    "CemaSavings",
    "TransferTaxBreakdown",
    "calculate_cema_savings",
    "calculate_transfer_taxes",
    "ChildSupportBreakdown",
    "MaintenanceDuration",
    "MaintenanceGuideline",
    "calculate_child_support",
    "calculate_maintenance_guideline",
    "maintenance_duration_range",
]
