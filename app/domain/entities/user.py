"""User entity, as seen by the engine."""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    ADMIN = "ADMIN"
    SUPERVISOR = "SUPERVISOR"
    AGENT = "AGENT"


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING = "PENDING"


@dataclass(frozen=True)
class User:
    """Referenced by id, name and role only."""

    id: str
    name: str
    role: Role
    status: UserStatus = UserStatus.ACTIVE

    def can_receive_leads(self) -> bool:
        """Only active agents receive assignments."""
        return self.role == Role.AGENT and self.status == UserStatus.ACTIVE
