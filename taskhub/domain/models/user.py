"""User domain model."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from taskhub.domain.models.actor import ActorIdentity, Role
from taskhub.domain.models.timestamps import ensure_utc, utc_now


def normalize_username(username: str) -> str:
    return username.strip()


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(frozen=True)
class User:
    """A registered account.

    Username and email are globally unique; the store enforces both with
    unique indexes. The password hash never leaves the service layer.

    Attributes:
        id: Unique identifier.
        username: Trimmed login name.
        email: Lower-cased email address.
        password_hash: bcrypt hash of the password.
        role: USER or ADMIN.
        created_at: Registration timestamp (UTC).
    """

    username: str
    email: str
    password_hash: str
    role: Role = Role.USER
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)

    def as_actor(self) -> ActorIdentity:
        """Return the identity this user acts under."""
        return ActorIdentity(id=self.id, role=self.role)

    def with_profile(
        self, username: str | None = None, email: str | None = None
    ) -> User:
        """Return a copy with the provided profile fields replaced."""
        return replace(
            self,
            username=normalize_username(username) if username else self.username,
            email=normalize_email(email) if email else self.email,
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "password_hash": self.password_hash,
            "role": self.role.value,
            "created_at": self.created_at,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> User:
        return cls(
            id=record["id"],
            username=record["username"],
            email=record["email"],
            password_hash=record["password_hash"],
            role=Role.from_value(record["role"]),
            created_at=ensure_utc(record["created_at"]) or utc_now(),
        )
