"""
Actor context for mutating operations.

The engine does not manage users or sessions. Callers pass the current actor
explicitly; only its role level is consulted.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Firm roles, highest privilege first."""
    ADMIN = "admin"
    ATTORNEY = "attorney"
    PARALEGAL = "paralegal"
    ASSISTANT = "assistant"

    @property
    def level(self) -> int:
        return ROLE_LEVELS[self]

    @property
    def display_name(self) -> str:
        return ROLE_NAMES[self]


ROLE_LEVELS = {
    Role.ADMIN: 100,
    Role.ATTORNEY: 80,
    Role.PARALEGAL: 60,
    Role.ASSISTANT: 40,
}

ROLE_NAMES = {
    Role.ADMIN: "Administrator",
    Role.ATTORNEY: "Attorney",
    Role.PARALEGAL: "Paralegal",
    Role.ASSISTANT: "Legal Assistant",
}


@dataclass(frozen=True)
class Actor:
    """The user on whose behalf an operation runs."""
    user_id: str
    role: Role
    team_id: Optional[str] = None

    @property
    def level(self) -> int:
        return self.role.level

    def has_level(self, required_level: int) -> bool:
        return self.level >= required_level
