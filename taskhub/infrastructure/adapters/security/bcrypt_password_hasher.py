"""bcrypt implementation of PasswordHasherProtocol."""

from __future__ import annotations

import bcrypt

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class BcryptPasswordHasher:
    """Salted bcrypt hashes with a configurable cost factor.

    Example:
        >>> hasher = BcryptPasswordHasher(rounds=4)
        >>> stored = hasher.hash("password123")
        >>> hasher.verify("password123", stored)
        True
    """

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """False for a wrong password or a stored value that is not a bcrypt hash."""
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError:
            return False
