"""
Tests for the Task Instance Binder.

Verifies:
1. resolve_task_view computes deadlines and their status against "now"
2. Missing required fields raise TaskValidationError naming every field
3. Read-only fields are filled from the calculators
4. refresh_instance writes computed values back, checks the actor's role
   and reports to the audit recorder
"""

import os
import sys
from datetime import date
from decimal import Decimal

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


NOTICE_OF_CLAIM = {
    "incident_date": "2024-01-15",
    "municipality": "City of New York",
    "location": "Broadway & W 42nd St",
    "description": "Trip and fall on defective sidewalk",
    "injuries": "Fractured wrist",
}


class TestResolveDeadline:
    """Deadline view for computable and advisory rules."""

    def test_notice_of_claim_safe(self, today):
        from binder.task_binder import resolve_task_view
        from calculator.deadlines import DeadlineStatus

        view = resolve_task_view("personal-injury", "pi-notice-of-claim", NOTICE_OF_CLAIM, today)
        assert view.deadline.computable
        assert view.deadline.due_date == date(2024, 4, 14)
        assert view.deadline.days_remaining == 44
        assert view.deadline.status == DeadlineStatus.SAFE
        assert view.has_deadline
        assert view.statute is not None

    def test_notice_of_claim_upcoming(self):
        from binder.task_binder import resolve_task_view
        from calculator.deadlines import DeadlineStatus

        view = resolve_task_view("personal-injury", "pi-notice-of-claim", NOTICE_OF_CLAIM, "2024-03-20")
        assert view.deadline.days_remaining == 25
        assert view.deadline.status == DeadlineStatus.UPCOMING

    def test_notice_of_claim_due_today_passed(self):
        from binder.task_binder import resolve_task_view
        from calculator.deadlines import DeadlineStatus

        view = resolve_task_view("personal-injury", "pi-notice-of-claim", NOTICE_OF_CLAIM, "2024-04-14")
        assert view.deadline.status == DeadlineStatus.PASSED

    def test_window_override(self, today):
        from binder.task_binder import resolve_task_view
        from calculator.deadlines import DeadlineStatus

        view = resolve_task_view(
            "personal-injury", "pi-notice-of-claim", NOTICE_OF_CLAIM, today, window_days=60,
        )
        assert view.deadline.status == DeadlineStatus.UPCOMING

    def test_window_from_settings(self, today, monkeypatch):
        from binder.task_binder import resolve_task_view
        from calculator.deadlines import DeadlineStatus
        from config.settings import get_settings

        monkeypatch.setenv("LEGAL_ENGINE_UPCOMING_WINDOW_DAYS", "45")
        get_settings.cache_clear()
        view = resolve_task_view("personal-injury", "pi-notice-of-claim", NOTICE_OF_CLAIM, today)
        assert view.deadline.status == DeadlineStatus.UPCOMING

    def test_trigger_not_answered(self, today):
        from binder.task_binder import resolve_task_view

        view = resolve_task_view(
            "personal-injury", "pi-bill-of-particulars", {"injuries_list": "Fractured wrist"}, today,
        )
        assert view.deadline.computable
        assert view.deadline.trigger_field == "demand_served_date"
        assert view.deadline.due_date is None
        assert view.deadline.status is None
        assert not view.has_deadline

    def test_omnibus_motion(self, today):
        from binder.task_binder import resolve_task_view
        from calculator.deadlines import DeadlineStatus

        view = resolve_task_view(
            "criminal-defense", "cd-omnibus-motion", {"arraignment_date": "2024-02-01"}, today,
        )
        assert view.deadline.due_date == date(2024, 3, 17)
        assert view.deadline.status == DeadlineStatus.UPCOMING

    def test_advisory_deadline(self, today):
        from binder.task_binder import resolve_task_view

        view = resolve_task_view("personal-injury", "pi-note-of-issue", {"discovery_complete": True}, today)
        assert not view.deadline.computable
        assert view.deadline.description == "After discovery complete, before trial"
        assert view.deadline.due_date is None

    def test_task_without_deadline(self, today):
        from binder.task_binder import resolve_task_view

        view = resolve_task_view("personal-injury", "pi-labor-law", {}, today)
        assert view.deadline is None
        assert view.derived_values == {}


class TestResolveErrors:
    """Errors raised by resolve_task_view."""

    def test_missing_field_named(self, today):
        from binder.task_binder import resolve_task_view
        from rules.exceptions import TaskValidationError

        values = dict(NOTICE_OF_CLAIM, municipality="")
        with pytest.raises(TaskValidationError) as exc_info:
            resolve_task_view("personal-injury", "pi-notice-of-claim", values, today)
        assert exc_info.value.fields == ["municipality"]
        assert exc_info.value.missing_fields == ["municipality"]
        assert exc_info.value.task_id == "pi-notice-of-claim"

    def test_all_missing_fields_at_once(self, today):
        from binder.task_binder import resolve_task_view
        from rules.exceptions import TaskValidationError

        with pytest.raises(TaskValidationError) as exc_info:
            resolve_task_view("personal-injury", "pi-notice-of-claim", {}, today)
        assert exc_info.value.missing_fields == [
            "incident_date", "municipality", "location", "description", "injuries",
        ]

    def test_unknown_task(self, today):
        from binder.task_binder import resolve_task_view
        from rules.exceptions import NotFoundError

        with pytest.raises(NotFoundError):
            resolve_task_view("personal-injury", "pi-nope", {}, today)

    def test_unknown_area(self, today):
        from binder.task_binder import resolve_task_view
        from rules.exceptions import NotFoundError

        with pytest.raises(NotFoundError):
            resolve_task_view("maritime", "pi-notice-of-claim", {}, today)

    def test_engine_errors_share_base(self, today):
        from binder.task_binder import resolve_task_view
        from rules.exceptions import LegalEngineError

        with pytest.raises(LegalEngineError):
            resolve_task_view("personal-injury", "pi-notice-of-claim", {}, today)


class TestTaskView:
    """TaskView is a read-only value object."""

    def test_view_frozen(self, today):
        from pydantic import ValidationError
        from binder.task_binder import resolve_task_view

        view = resolve_task_view("personal-injury", "pi-notice-of-claim", NOTICE_OF_CLAIM, today)
        with pytest.raises(ValidationError):
            view.task_id = "other"

    def test_input_not_mutated(self, today):
        from binder.task_binder import resolve_task_view

        values = {"sale_price": "2500000", "is_nyc": True, "is_residential": True}
        resolve_task_view("real-estate", "re-transfer-taxes", values, today)
        assert values == {"sale_price": "2500000", "is_nyc": True, "is_residential": True}

    def test_view_metadata(self, today):
        from binder.task_binder import resolve_task_view
        from rules.rule_types import PracticeAreaId

        view = resolve_task_view("personal-injury", "pi-notice-of-claim", NOTICE_OF_CLAIM, today)
        assert view.practice_area == PracticeAreaId.PERSONAL_INJURY
        assert view.name == "File Notice of Claim"
        assert view.as_of == today
        assert view.value("municipality") == "City of New York"

    def test_value_mappings_read_only(self, today):
        from binder.task_binder import resolve_task_view

        view = resolve_task_view(
            "real-estate", "re-cema", {"existing_mortgage": 400_000, "new_mortgage": 600_000}, today,
        )
        with pytest.raises(TypeError):
            view.field_values["new_mortgage"] = 0
        with pytest.raises(TypeError):
            view.derived_values["gap_amount"] = 0
        assert view.model_dump()["derived_values"]["gap_amount"] == Decimal("200000.00")


class TestDerivedValues:
    """Read-only fields filled by the calculators."""

    def test_transfer_taxes(self, today):
        from binder.task_binder import resolve_task_view

        view = resolve_task_view(
            "real-estate", "re-transfer-taxes",
            {"sale_price": "$2,500,000", "is_nyc": "on", "is_residential": True},
            today,
        )
        assert view.derived_values == {
            "nys_transfer_tax": Decimal("10000.00"),
            "nyc_transfer_tax": Decimal("35625.00"),
            "mansion_tax": Decimal("31250.00"),
        }

    def test_transfer_taxes_unchecked_boxes(self, today):
        from binder.task_binder import resolve_task_view

        view = resolve_task_view("real-estate", "re-transfer-taxes", {"sale_price": 2_500_000}, today)
        assert view.value("nys_transfer_tax") == Decimal("10000.00")
        assert view.value("nyc_transfer_tax") == Decimal("0")
        assert view.value("mansion_tax") == Decimal("0")

    def test_cema(self, today):
        from binder.task_binder import resolve_task_view

        view = resolve_task_view(
            "real-estate", "re-cema", {"existing_mortgage": 400_000, "new_mortgage": 600_000}, today,
        )
        assert view.derived_values["gap_amount"] == Decimal("200000.00")
        assert view.derived_values["mortgage_tax_savings"] == Decimal("7700.00")

    def test_child_support_five_plus(self, today):
        from binder.task_binder import resolve_task_view

        view = resolve_task_view(
            "family-law", "fl-child-support",
            {"cp_income": 60_000, "ncp_income": 90_000, "num_children": "5+"},
            today,
        )
        # 150,000 x 35% x 60% share
        assert view.derived_values["ncp_annual_obligation"] == Decimal("31500.00")

    def test_maintenance_duration(self, today):
        from binder.task_binder import resolve_task_view

        view = resolve_task_view(
            "family-law", "fl-maintenance",
            {
                "payor_income": 150_000,
                "payee_income": 50_000,
                "marriage_length": 10,
                "pre_post_divorce": "Post-divorce",
            },
            today,
        )
        assert view.derived_values["advisory_duration"].startswith("1.5 to 3.0 years")
        # 40% x 200,000 - 50,000 is below 30% x 150,000 - 20% x 50,000
        assert view.derived_values["guideline_maintenance"] == Decimal("30000.00")

    def test_temporary_maintenance(self, today):
        from binder.task_binder import resolve_task_view

        view = resolve_task_view(
            "family-law", "fl-maintenance",
            {
                "payor_income": 150_000,
                "payee_income": 50_000,
                "marriage_length": 10,
                "child_support_paid": "12000",
                "pre_post_divorce": "Pendente lite (during)",
            },
            today,
        )
        assert view.derived_values == {"guideline_maintenance": Decimal("17500.00")}

    def test_speedy_trial_elapsed_from_now(self, today):
        from binder.task_binder import resolve_task_view

        view = resolve_task_view(
            "criminal-defense", "cd-speedy-trial",
            {"charge_type": "Misdemeanor (90 days)", "arraignment_date": "2024-01-01", "excludable_time": "10"},
            today,
        )
        # Jan 1 to Mar 1 2024 is 60 days
        assert view.derived_values == {"chargeable_time": 50, "time_remaining": 40}

    def test_speedy_trial_given_total(self, today):
        from binder.task_binder import resolve_task_view

        view = resolve_task_view(
            "criminal-defense", "cd-speedy-trial",
            {
                "charge_type": "Other Felony (6 months)",
                "arraignment_date": "2024-01-01",
                "total_time": "200",
                "excludable_time": "20",
            },
            today,
        )
        assert view.derived_values == {"chargeable_time": 180, "time_remaining": 2}

    def test_speedy_trial_excludable_exceeds_total(self, today):
        from binder.task_binder import resolve_task_view
        from rules.exceptions import InvalidInputError

        with pytest.raises(InvalidInputError):
            resolve_task_view(
                "criminal-defense", "cd-speedy-trial",
                {
                    "charge_type": "Violation (60 days)",
                    "arraignment_date": "2024-01-01",
                    "total_time": 10,
                    "excludable_time": 20,
                },
                today,
            )

    def test_limitations_expiry(self, today):
        from binder.task_binder import resolve_task_view

        view = resolve_task_view(
            "personal-injury", "pi-summons-complaint",
            {
                "plaintiff_name": "Jane Roe",
                "defendant_name": "Acme Hospital",
                "venue": "Kings",
                "causes_of_action": "Medical malpractice",
                "claim_type": "medical_malpractice",
                "accrual_date": "2024-01-15",
            },
            today,
        )
        assert view.derived_values == {"limitations_expiry": date(2026, 7, 15)}

    def test_missing_optional_inputs_skip_derivation(self, today):
        from binder.task_binder import resolve_task_view

        view = resolve_task_view(
            "personal-injury", "pi-summons-complaint",
            {
                "plaintiff_name": "Jane Roe",
                "defendant_name": "Acme Hospital",
                "venue": "Kings",
                "causes_of_action": "Negligence",
            },
            today,
        )
        assert view.derived_values == {}

    def test_registered_tasks(self):
        from binder.derived_values import DerivedValueRegistry

        assert DerivedValueRegistry.task_ids() == [
            "cd-speedy-trial",
            "fl-child-support",
            "fl-maintenance",
            "pi-summons-complaint",
            "re-cema",
            "re-transfer-taxes",
        ]

    def test_derived_fields_are_readonly_catalogue_fields(self):
        from binder.derived_values import DerivedValueRegistry
        from rules.catalogue import list_practice_areas

        tasks = {t.task_id: t for area in list_practice_areas() for t in area.tasks}
        for task_id in DerivedValueRegistry.task_ids():
            assert tasks[task_id].readonly_fields, task_id


def _create_cema_record(record_store):
    from binder.record_store import TaskRecord
    from rules.rule_types import PracticeAreaId

    record = TaskRecord(
        matter_id="m-1",
        practice_area=PracticeAreaId.REAL_ESTATE,
        task_id="re-cema",
        field_values={"existing_mortgage": "400000", "new_mortgage": "600000"},
    )
    return record_store.create(record)


class TestRefreshInstance:
    """TaskInstanceBinder.refresh_instance."""

    def test_writes_derived_values(self, task_binder, record_store, paralegal, today):
        record = _create_cema_record(record_store)

        view = task_binder.refresh_instance(record.record_id, paralegal, today)

        stored = record_store.get(record.record_id)
        assert stored.field_values["gap_amount"] == Decimal("200000.00")
        assert stored.field_values["mortgage_tax_savings"] == Decimal("7700.00")
        assert stored.field_values["existing_mortgage"] == "400000"
        assert view.derived_values["gap_amount"] == Decimal("200000.00")

    def test_audits_changed_fields(self, task_binder, record_store, audit_recorder, paralegal, today):
        from audit.audit_models import AuditAction

        record = _create_cema_record(record_store)
        task_binder.refresh_instance(record.record_id, paralegal, today)

        entries = audit_recorder.entries_for("task_data", record.record_id)
        assert len(entries) == 1
        assert entries[0].action == AuditAction.SAVED
        assert entries[0].user_id == "u-para"
        assert entries[0].team_id == "team-1"
        assert entries[0].details == {"task_id": "re-cema", "fields": ["gap_amount", "mortgage_tax_savings"]}

    def test_second_refresh_changes_nothing(self, task_binder, record_store, audit_recorder, paralegal, today):
        record = _create_cema_record(record_store)
        task_binder.refresh_instance(record.record_id, paralegal, today)
        task_binder.refresh_instance(record.record_id, paralegal, today)

        entries = audit_recorder.entries_for("task_data", record.record_id)
        assert entries[-1].details["fields"] == []

    def test_assistant_denied(self, task_binder, record_store, audit_recorder, assistant, today):
        from rules.exceptions import PermissionDeniedError

        record = _create_cema_record(record_store)
        with pytest.raises(PermissionDeniedError):
            task_binder.refresh_instance(record.record_id, assistant, today)

        assert "gap_amount" not in record_store.get(record.record_id).field_values
        assert audit_recorder.entries == []

    def test_threshold_from_settings(self, record_store, audit_recorder, paralegal, today):
        from binder.context import Actor, Role
        from binder.task_binder import TaskInstanceBinder
        from config.settings import EngineSettings
        from rules.exceptions import PermissionDeniedError

        binder = TaskInstanceBinder(record_store, audit_recorder, EngineSettings(_env_file=None, min_write_role_level=80))
        record = _create_cema_record(record_store)

        with pytest.raises(PermissionDeniedError):
            binder.refresh_instance(record.record_id, paralegal, today)
        attorney = Actor(user_id="u-atty", role=Role.ATTORNEY)
        binder.refresh_instance(record.record_id, attorney, today)

    def test_unknown_record(self, task_binder, paralegal, today):
        from rules.exceptions import NotFoundError

        with pytest.raises(NotFoundError):
            task_binder.refresh_instance("missing", paralegal, today)

    def test_invalid_stored_values(self, task_binder, record_store, paralegal, today):
        from rules.exceptions import TaskValidationError

        record = _create_cema_record(record_store)
        record_store.update(record.record_id, {"field_values": {"new_mortgage": ""}})
        with pytest.raises(TaskValidationError) as exc_info:
            task_binder.refresh_instance(record.record_id, paralegal, today)
        assert exc_info.value.fields == ["new_mortgage"]

    def test_audit_failure_does_not_fail_refresh(self, record_store, paralegal, engine_settings, today):
        from audit.audit_recorder import AuditRecorder
        from binder.task_binder import TaskInstanceBinder

        class BrokenRecorder(AuditRecorder):
            def record(self, action, entity_type, entity_id, details=None, user_id=None, team_id=None):
                raise RuntimeError("audit sink down")

        binder = TaskInstanceBinder(record_store, BrokenRecorder(), engine_settings)
        record = _create_cema_record(record_store)

        view = binder.refresh_instance(record.record_id, paralegal, today)
        assert view.derived_values["gap_amount"] == Decimal("200000.00")
        assert record_store.get(record.record_id).field_values["gap_amount"] == Decimal("200000.00")

    def test_view_instance_does_not_write(self, task_binder, record_store, audit_recorder, today):
        record = _create_cema_record(record_store)

        view = task_binder.view_instance(record.record_id, today)
        assert view.derived_values["gap_amount"] == Decimal("200000.00")
        assert "gap_amount" not in record_store.get(record.record_id).field_values
        assert audit_recorder.entries == []

    def test_cleared_input_clears_derived_value(self, task_binder, record_store, audit_recorder, paralegal, today):
        from binder.record_store import TaskRecord
        from rules.rule_types import PracticeAreaId

        record = record_store.create(TaskRecord(
            matter_id="m-1",
            practice_area=PracticeAreaId.PERSONAL_INJURY,
            task_id="pi-summons-complaint",
            field_values={
                "plaintiff_name": "Jane Roe",
                "defendant_name": "Acme Corp",
                "venue": "Kings",
                "causes_of_action": "Negligence",
                "claim_type": "general_negligence",
                "accrual_date": "2023-01-10",
            },
        ))
        task_binder.refresh_instance(record.record_id, paralegal, today)
        assert record_store.get(record.record_id).field_values["limitations_expiry"] == date(2026, 1, 10)

        record_store.update(record.record_id, {"field_values": {"accrual_date": ""}})
        view = task_binder.refresh_instance(record.record_id, paralegal, today)

        assert view.derived_values == {}
        assert record_store.get(record.record_id).field_values["limitations_expiry"] is None
        assert audit_recorder.entries[-1].details["fields"] == ["limitations_expiry"]
