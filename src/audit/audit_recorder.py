"""
Audit recorder contract.

Mutating operations report what they did through AuditRecorder.record and
do not wait on or depend on the outcome. Where the trail is stored is up to
the host application; LoggingAuditRecorder writes entries to the log and
keeps the most recent ones in memory.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Union

from .audit_models import AuditAction, AuditEntry

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1000


class AuditRecorder(ABC):
    """Sink for audit entries."""

    @abstractmethod
    def record(
        self,
        action: Union[AuditAction, str],
        entity_type: str,
        entity_id: Optional[str],
        details: Optional[Dict[str, Any]] = None,
        user_id: Optional[str] = None,
        team_id: Optional[str] = None,
    ) -> None:
        """Record one audited action."""


class LoggingAuditRecorder(AuditRecorder):
    """Logs each entry at INFO and keeps a bounded in-memory history."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        self._entries: Deque[AuditEntry] = deque(maxlen=max_entries)

    def record(
        self,
        action: Union[AuditAction, str],
        entity_type: str,
        entity_id: Optional[str],
        details: Optional[Dict[str, Any]] = None,
        user_id: Optional[str] = None,
        team_id: Optional[str] = None,
    ) -> None:
        entry = AuditEntry(
            action=AuditAction(action),
            entity_type=entity_type,
            entity_id=entity_id,
            user_id=user_id,
            team_id=team_id,
            details=dict(details or {}),
        )
        self._entries.append(entry)
        logger.info(f"AUDIT {entry.get_change_summary()}")

    @property
    def entries(self) -> List[AuditEntry]:
        return list(self._entries)

    def entries_for(self, entity_type: str, entity_id: str) -> List[AuditEntry]:
        return [e for e in self._entries if e.entity_type == entity_type and e.entity_id == entity_id]
