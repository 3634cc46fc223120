"""PyJWT implementation of TokenCodecProtocol.

Token claims:
    sub  - user id (string)
    role - role at issue time
    iat  - issued at
    exp  - expiry, iat + ttl (24 hours by default)
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import jwt
import structlog

from taskhub.application.ports.credentials import TokenClaims
from taskhub.domain.errors import InvalidTokenError
from taskhub.domain.models.timestamps import utc_now

logger = structlog.get_logger(__name__)

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class JwtTokenCodec:
    """Signs and verifies HS256 session tokens.

    Example:
        >>> codec = JwtTokenCodec(secret="change-me-to-a-long-random-secret")
        >>> token = codec.encode("8d6f...", "user")
        >>> codec.decode(token).role
        'user'
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    def encode(self, subject: str, role: str) -> str:
        issued_at = self._clock()
        payload = {
            "sub": subject,
            "role": role,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenClaims:
        """Verify signature and expiry.

        Raises:
            InvalidTokenError: reason "expired" or "invalid".
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            logger.info("token_expired")
            raise InvalidTokenError("expired") from None
        except jwt.InvalidTokenError as e:
            logger.info("token_rejected", error_type=type(e).__name__)
            raise InvalidTokenError("invalid") from None

        return TokenClaims(
            subject=str(payload["sub"]),
            role=str(payload.get("role", "")),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
