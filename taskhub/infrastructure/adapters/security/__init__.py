"""Credential adapters: bcrypt password hashing and PyJWT session tokens."""

from taskhub.infrastructure.adapters.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from taskhub.infrastructure.adapters.security.jwt_token_codec import JwtTokenCodec

__all__: list[str] = ["BcryptPasswordHasher", "JwtTokenCodec"]
