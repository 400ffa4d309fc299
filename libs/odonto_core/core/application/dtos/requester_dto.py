from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class UserRole(StrEnum):
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    DENTIST = "DENTIST"
    RECEPTIONIST = "RECEPTIONIST"


MANAGEMENT_ROLES = frozenset({UserRole.OWNER, UserRole.ADMIN})
SCHEDULING_ROLES = frozenset({UserRole.OWNER, UserRole.ADMIN, UserRole.RECEPTIONIST})


@dataclass(frozen=True, slots=True)
class Requester:
    """Quem está pedindo (resolvido pela sessão); só id e papel importam aqui."""
    user_id: str
    role: str | None = None

    @property
    def is_manager(self) -> bool:
        return self.role in MANAGEMENT_ROLES
