"""Credential protocols: password hashing and session token encoding.

The Credential Service composes these two ports. Adapters live in
taskhub.infrastructure.adapters.security (bcrypt, PyJWT).
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class TokenClaims:
    """Decoded contents of a session token.

    Attributes:
        subject: User id as a string.
        role: Role value at issue time.
        issued_at: Issue time (UTC).
        expires_at: Expiry time (UTC).
    """

    subject: str
    role: str
    issued_at: datetime
    expires_at: datetime


class PasswordHasherProtocol(Protocol):
    """Protocol for one-way password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Hash a plaintext password for storage."""
        ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash."""
        ...


class TokenCodecProtocol(Protocol):
    """Protocol for signing and verifying session tokens."""

    @abstractmethod
    def encode(self, subject: str, role: str) -> str:
        """Issue a signed token for ``subject``."""
        ...

    @abstractmethod
    def decode(self, token: str) -> TokenClaims:
        """Verify a token and return its claims.

        Raises:
            InvalidTokenError: Signature, format or expiry check failed.
        """
        ...
