"""Credential service: password checks and session tokens.

Tokens carry the user id (``sub``) and role, are signed with HS256 and
are valid for 24 hours by default. ``resolve_actor`` is what request
authentication uses: it verifies the token and then re-reads the user,
so a deleted user's token stops working and a role change takes effect
immediately (the stored role wins over the role in the token).

bcrypt is CPU bound; hashing and verification run in a worker thread so
they do not block the event loop.
"""

from __future__ import annotations

import asyncio
from uuid import UUID

import structlog

from taskhub.application.ports.credentials import (
    PasswordHasherProtocol,
    TokenCodecProtocol,
)
from taskhub.application.ports.entity_store import Collection, EntityStoreProtocol
from taskhub.domain.errors import InvalidCredentialsError, InvalidTokenError
from taskhub.domain.models.actor import ActorIdentity, Role
from taskhub.domain.models.user import User, normalize_username
from taskhub.domain.value_objects.filter_expression import FieldEquals

logger = structlog.get_logger(__name__)


class CredentialService:
    """Authenticates users and issues/verifies session tokens.

    Example:
        >>> credentials = CredentialService(store, hasher, codec)
        >>> actor = await credentials.authenticate("admin", "password123")
        >>> token = credentials.issue_token(actor)
        >>> await credentials.resolve_actor(token) == actor
        True
    """

    def __init__(
        self,
        store: EntityStoreProtocol,
        hasher: PasswordHasherProtocol,
        token_codec: TokenCodecProtocol,
    ) -> None:
        self._store = store
        self._hasher = hasher
        self._token_codec = token_codec
        self._log = logger.bind(service="credential_service")

    async def hash_password(self, password: str) -> str:
        return await asyncio.to_thread(self._hasher.hash, password)

    async def check_credentials(self, username: str, password: str) -> User:
        """Return the user for a username/password pair.

        Raises:
            InvalidCredentialsError: Unknown username or wrong password.
                The two cases are indistinguishable to the caller.
        """
        record = await self._store.find_one(
            Collection.USERS, FieldEquals("username", normalize_username(username))
        )
        if record is None:
            self._log.info("login_unknown_user")
            raise InvalidCredentialsError()

        user = User.from_record(record)
        valid = await asyncio.to_thread(
            self._hasher.verify, password, user.password_hash
        )
        if not valid:
            self._log.info("login_bad_password", user_id=str(user.id))
            raise InvalidCredentialsError()
        return user

    async def authenticate(self, username: str, password: str) -> ActorIdentity:
        """Verify credentials and return the identity they belong to."""
        user = await self.check_credentials(username, password)
        return user.as_actor()

    def issue_token(self, actor: ActorIdentity) -> str:
        return self._token_codec.encode(str(actor.id), actor.role.value)

    def verify_token(self, token: str) -> ActorIdentity:
        """Decode a token into the identity it was issued for.

        Raises:
            InvalidTokenError: Bad signature, expired, or malformed claims.
        """
        claims = self._token_codec.decode(token)
        try:
            return ActorIdentity(
                id=UUID(claims.subject), role=Role.from_value(claims.role)
            )
        except ValueError:
            raise InvalidTokenError("malformed_claims") from None

    async def resolve_actor(self, token: str) -> ActorIdentity:
        """Verify a token and load the current identity of its user.

        Raises:
            InvalidTokenError: Token rejected or user no longer exists.
        """
        claimed = self.verify_token(token)
        record = await self._store.find_one(
            Collection.USERS, FieldEquals("id", claimed.id)
        )
        if record is None:
            self._log.info("token_user_missing", user_id=str(claimed.id))
            raise InvalidTokenError("unknown_user")
        return User.from_record(record).as_actor()
