"""Authentication dependencies.

``get_current_actor`` turns the ``Authorization: Bearer <token>`` header
into an ActorIdentity through CredentialService.resolve_actor, so every
protected route sees the user's current role. ``require_admin`` layers
the admin check on top.
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskhub.api.dependencies.services import get_credential_service
from taskhub.application.services.authorization_policy import ensure_admin
from taskhub.application.services.credential_service import CredentialService
from taskhub.domain.errors import AuthenticationError
from taskhub.domain.models.actor import ActorIdentity

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    credential_service: CredentialService = Depends(get_credential_service),
) -> ActorIdentity:
    """Resolve the bearer token into the acting identity.

    Raises:
        AuthenticationError: No bearer token was sent.
        InvalidTokenError: Token rejected or its user no longer exists.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token, authorization denied")
    return await credential_service.resolve_actor(credentials.credentials)


async def require_admin(
    actor: ActorIdentity = Depends(get_current_actor),
) -> ActorIdentity:
    """Raises AdminRequiredError for non-admin actors."""
    ensure_admin(actor)
    return actor
