"""
Audit Trail Data Models

Defines the audit entry recorded for every mutating operation on clients,
matters, tasks and task data.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
import uuid


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditAction(str, Enum):
    """Types of auditable actions in the system."""
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    VIEWED = "viewed"
    SAVED = "saved"
    CALCULATED = "calculated"
    LOGIN = "login"


@dataclass
class AuditEntry:
    """
    Represents a single audit log entry.

    Captures who did what to which entity, with free-form details such as
    the fields that changed.
    """
    # Core identification
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=_utcnow)

    # Action details
    action: AuditAction = AuditAction.UPDATED
    entity_type: str = ""  # e.g., "client", "matter", "task", "task_data"
    entity_id: Optional[str] = None

    # User context
    user_id: Optional[str] = None
    team_id: Optional[str] = None

    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert audit entry to dictionary for storage/serialization."""
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "action": self.action.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "user_id": self.user_id,
            "team_id": self.team_id,
            "details": {k: self._serialize_value(v) for k, v in self.details.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AuditEntry":
        """Create audit entry from dictionary."""
        timestamp = data.get("timestamp")
        action = data.get("action", AuditAction.UPDATED)
        return cls(
            id=data.get("id", str(uuid.uuid4())),
            timestamp=datetime.fromisoformat(timestamp) if isinstance(timestamp, str) else (timestamp or _utcnow()),
            action=AuditAction(action),
            entity_type=data.get("entity_type", ""),
            entity_id=data.get("entity_id"),
            user_id=data.get("user_id"),
            team_id=data.get("team_id"),
            details=data.get("details", {}),
        )

    def _serialize_value(self, value: Any) -> Any:
        """Serialize value for storage."""
        if value is None:
            return None
        if isinstance(value, (str, int, float, bool)):
            return value
        if isinstance(value, list):
            return [self._serialize_value(v) for v in value]
        if isinstance(value, dict):
            return {k: self._serialize_value(v) for k, v in value.items()}
        if hasattr(value, "isoformat"):
            return value.isoformat()
        # Decimal and anything else
        return str(value)

    def get_change_summary(self) -> str:
        """Generate human-readable summary of the change."""
        target = f" {self.entity_id}" if self.entity_id else ""
        changed = ""
        if self.details:
            changed = f": {', '.join(sorted(self.details))}"
        by = f" by {self.user_id}" if self.user_id else ""
        return f"{self.action.value.capitalize()} {self.entity_type}{target}{changed}{by}"
