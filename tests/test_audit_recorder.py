"""
Tests for the audit recorder and audit entries.
"""

import logging
import os
import sys
from datetime import date, datetime
from decimal import Decimal

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


class TestLoggingAuditRecorder:
    """Tests for LoggingAuditRecorder."""

    def test_record_keeps_entry(self, audit_recorder):
        from audit.audit_models import AuditAction

        audit_recorder.record("updated", "task", "t-1", {"status": "completed"}, user_id="u-1")
        entry = audit_recorder.entries[0]
        assert entry.action == AuditAction.UPDATED
        assert entry.entity_type == "task"
        assert entry.entity_id == "t-1"
        assert entry.details == {"status": "completed"}
        assert entry.user_id == "u-1"
        assert entry.timestamp.tzinfo is not None

    def test_record_logs_summary(self, audit_recorder, caplog):
        with caplog.at_level(logging.INFO, logger="audit.audit_recorder"):
            audit_recorder.record("created", "matter", "m-1", {"name": "Roe v. Acme"})
        assert "Created matter m-1: name" in caplog.text

    def test_bounded_history(self):
        from audit.audit_recorder import LoggingAuditRecorder

        recorder = LoggingAuditRecorder(max_entries=2)
        for i in range(3):
            recorder.record("viewed", "matter", f"m-{i}")
        assert [e.entity_id for e in recorder.entries] == ["m-1", "m-2"]

    def test_unknown_action(self, audit_recorder):
        with pytest.raises(ValueError):
            audit_recorder.record("exploded", "task", "t-1")

    def test_entries_for(self, audit_recorder):
        audit_recorder.record("created", "task", "t-1")
        audit_recorder.record("created", "task", "t-2")
        audit_recorder.record("updated", "task", "t-1")
        assert len(audit_recorder.entries_for("task", "t-1")) == 2


class TestAuditEntry:
    """Tests for AuditEntry serialization."""

    def test_to_dict_serializes_values(self):
        from audit.audit_models import AuditAction, AuditEntry

        entry = AuditEntry(
            action=AuditAction.SAVED,
            entity_type="task_data",
            entity_id="r-1",
            details={"gap_amount": Decimal("200000.00"), "due": date(2024, 4, 14), "fields": ["a"]},
        )
        data = entry.to_dict()
        assert data["action"] == "saved"
        assert data["details"] == {"gap_amount": "200000.00", "due": "2024-04-14", "fields": ["a"]}

    def test_from_dict(self):
        from audit.audit_models import AuditAction, AuditEntry

        entry = AuditEntry.from_dict({
            "id": "a-1",
            "timestamp": "2024-03-01T09:30:00",
            "action": "deleted",
            "entity_type": "client",
            "entity_id": "c-1",
        })
        assert entry.id == "a-1"
        assert entry.timestamp == datetime(2024, 3, 1, 9, 30)
        assert entry.action == AuditAction.DELETED
        assert entry.details == {}

    def test_change_summary(self):
        from audit.audit_models import AuditAction, AuditEntry

        entry = AuditEntry(action=AuditAction.LOGIN, entity_type="user", entity_id="u-1", user_id="u-1")
        assert entry.get_change_summary() == "Login user u-1 by u-1"
