"""
Audit Trail Module.

Mutating engine operations report to an AuditRecorder:

    from audit import LoggingAuditRecorder

    recorder = LoggingAuditRecorder()
    recorder.record("updated", "task", record_id, {"fields": ["gap_amount"]})
"""

from audit.audit_models import AuditAction, AuditEntry
from audit.audit_recorder import DEFAULT_MAX_ENTRIES, AuditRecorder, LoggingAuditRecorder

__all__ = [
    "AuditAction",
    "AuditEntry",
    "AuditRecorder",
    "LoggingAuditRecorder",
    "DEFAULT_MAX_ENTRIES",
]
