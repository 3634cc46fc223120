"""Actor identity and roles.

An ActorIdentity is passed explicitly into every service call that needs
to know who is acting. There is no ambient request-scoped actor.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class Role(Enum):
    """Role carried by every user and actor.

    Roles:
        USER: Scoped to tasks they created or are assigned to.
        ADMIN: Unrestricted.
    """

    USER = "user"
    ADMIN = "admin"

    @classmethod
    def from_value(cls, value: str | Role) -> Role:
        """Parse a stored or claimed role, rejecting unknown values."""
        if isinstance(value, Role):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown role: {value!r}") from None


@dataclass(frozen=True)
class ActorIdentity:
    """The authenticated identity performing a request.

    Attributes:
        id: UUID of the acting user.
        role: Role of the acting user.
    """

    id: UUID
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
