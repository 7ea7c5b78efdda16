#!/usr/bin/env python3
"""
Example script showing how to use the legal rules engine programmatically
"""
import sys
import os
from datetime import date

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from audit import LoggingAuditRecorder
from binder import Actor, InMemoryTaskRecordStore, Role, TaskInstanceBinder, TaskRecord, resolve_task_view
from calculator import (
    calculate_cema_savings,
    calculate_child_support,
    calculate_transfer_taxes,
    maintenance_duration_range,
    remaining_time_for_budget,
    speedy_trial_budget,
)
from config import configure_logging
from rules import PracticeAreaId, TaskValidationError, list_practice_areas, lookup_task


def example_catalogue():
    """Example: Browse the practice-area catalogue"""
    print("Example 1: Practice Areas and Tasks")
    print("=" * 60)

    for area in list_practice_areas():
        print(f"{area.name} ({len(area.tasks)} tasks)")

    task = lookup_task("personal-injury", "pi-notice-of-claim")
    print(f"\n{task.name}")
    print(f"  Statute:  {task.statute}")
    print(f"  Deadline: {task.deadline.description}")
    print()


def example_deadline():
    """Example: Resolve a task with a computable deadline"""
    print("Example 2: Notice of Claim Deadline")
    print("=" * 60)

    view = resolve_task_view(
        PracticeAreaId.PERSONAL_INJURY,
        "pi-notice-of-claim",
        {
            "incident_date": "2024-01-15",
            "municipality": "City of New York",
            "location": "Broadway & W 42nd St",
            "description": "Trip and fall on defective sidewalk",
            "injuries": "Fractured wrist",
        },
        now=date(2024, 3, 1),
    )
    deadline = view.deadline
    print(f"Due date:       {deadline.due_date}")
    print(f"Days remaining: {deadline.days_remaining}")
    print(f"Status:         {deadline.status.value}")
    print()


def example_validation():
    """Example: Submitted values that fail validation"""
    print("Example 3: Validation Errors")
    print("=" * 60)

    try:
        resolve_task_view("personal-injury", "pi-notice-of-claim", {"incident_date": "next week"}, now=date(2024, 3, 1))
    except TaskValidationError as e:
        for issue in e.issues:
            print(f"  {issue.field}: {issue.message}")
    print()


def example_calculators():
    """Example: Tiered monetary and time-budget calculators"""
    print("Example 4: Calculators")
    print("=" * 60)

    taxes = calculate_transfer_taxes(2_500_000, is_nyc=True, is_residential=True)
    print(f"Transfer taxes on $2,500,000 NYC residential: ${taxes.total:,.2f}")
    print(f"  NYS ${taxes.nys_transfer_tax:,.2f}  NYC ${taxes.nyc_transfer_tax:,.2f}  Mansion ${taxes.mansion_tax:,.2f}")

    cema = calculate_cema_savings(400_000, 600_000)
    print(f"CEMA savings on $400,000 assigned: ${cema.mortgage_tax_savings:,.2f}")

    support = calculate_child_support(60_000, 90_000, 2)
    print(f"CSSA obligation (2 children): ${support.ncp_annual_obligation:,.2f}/yr")

    print(f"Maintenance, 12 year marriage: {maintenance_duration_range(12).describe()}")

    result = remaining_time_for_budget(speedy_trial_budget("felony"), 150, 20, "2024-01-01")
    print(f"Speedy trial (felony): {result.chargeable_days} chargeable, {result.remaining_days} remaining")
    print()


def example_refresh():
    """Example: Write computed values back to a saved task"""
    print("Example 5: Refresh a Saved Task")
    print("=" * 60)

    store = InMemoryTaskRecordStore()
    audit = LoggingAuditRecorder()
    binder = TaskInstanceBinder(store, audit)

    record = store.create(TaskRecord(
        matter_id="matter-1",
        practice_area=PracticeAreaId.REAL_ESTATE,
        task_id="re-cema",
        field_values={"existing_lender": "First Bank", "existing_mortgage": "400000", "new_mortgage": "600000"},
    ))
    actor = Actor(user_id="jsmith", role=Role.PARALEGAL)
    binder.refresh_instance(record.record_id, actor, now=date(2024, 3, 1))

    saved = store.get(record.record_id)
    print(f"Gap amount:   {saved.field_values['gap_amount']}")
    print(f"Tax savings:  {saved.field_values['mortgage_tax_savings']}")
    for entry in audit.entries:
        print(f"Audit: {entry.get_change_summary()}")
    print()


if __name__ == "__main__":
    configure_logging()

    example_catalogue()
    example_deadline()
    example_validation()
    example_calculators()
    example_refresh()
