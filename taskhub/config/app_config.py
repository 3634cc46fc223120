"""Application configuration.

Environment Variables:
- ENVIRONMENT: development | test | production (default: development)
- LOG_LEVEL: Minimum log level (default: INFO)
- DATABASE_URL: Database connection string; unset uses the in-memory store
- JWT_SECRET: Token signing secret (required outside development/test)
- JWT_ALGORITHM: Token signing algorithm (default: HS256)
- TOKEN_TTL_HOURS: Token validity in hours (default: 24)
- BCRYPT_ROUNDS: bcrypt cost factor, 4-31 (default: 10)
- UPLOAD_DIR: Directory for task attachments (default: uploads)
- SEED_PASSWORD: Password given to seeded demo accounts (default: password123)
- SQLALCHEMY_ECHO: Log SQL statements when true (default: false)

A ``.env`` file is loaded by the bootstrap before ``from_environment``
runs; real environment variables take precedence.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta

DEVELOPMENT_ENVIRONMENTS = frozenset({"development", "test"})

# Only used where no JWT_SECRET is configured in development/test
DEVELOPMENT_JWT_SECRET = "taskhub-development-secret-change-me-please"

SUPPORTED_JWT_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})


def _get_int_env(key: str, default: int) -> int:
    """Integer environment variable; unset or unparsable values use the default."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool_env(key: str, default: bool = False) -> bool:
    value = os.environ.get(key)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class AppConfig:
    """Runtime configuration for the API process.

    Attributes:
        environment: Deployment environment name.
        log_level: Minimum log level name.
        database_url: SQLAlchemy URL, or None for the in-memory store.
        jwt_secret: HMAC secret for session tokens.
        jwt_algorithm: HMAC algorithm for session tokens.
        token_ttl_hours: Session token validity.
        bcrypt_rounds: bcrypt cost factor.
        upload_dir: Attachment directory.
        seed_password: Password of the seeded demo accounts.
        sqlalchemy_echo: Echo SQL statements.
    """

    environment: str = "development"
    log_level: str = "INFO"
    database_url: str | None = None
    jwt_secret: str = field(default=DEVELOPMENT_JWT_SECRET, repr=False)
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = 24
    bcrypt_rounds: int = 10
    upload_dir: str = "uploads"
    seed_password: str = field(default="password123", repr=False)
    sqlalchemy_echo: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.jwt_secret:
            raise ValueError("JWT_SECRET is required")
        if (
            not self.is_development
            and self.jwt_secret == DEVELOPMENT_JWT_SECRET
        ):
            raise ValueError(
                f"JWT_SECRET must be set when ENVIRONMENT={self.environment!r}"
            )
        if self.jwt_algorithm not in SUPPORTED_JWT_ALGORITHMS:
            raise ValueError(
                f"JWT_ALGORITHM must be one of {sorted(SUPPORTED_JWT_ALGORITHMS)}, "
                f"got {self.jwt_algorithm!r}"
            )
        if self.token_ttl_hours < 1:
            raise ValueError(
                f"token_ttl_hours must be positive, got {self.token_ttl_hours}"
            )
        if not 4 <= self.bcrypt_rounds <= 31:
            raise ValueError(
                f"bcrypt_rounds must be between 4 and 31, got {self.bcrypt_rounds}"
            )
        if not self.upload_dir:
            raise ValueError("upload_dir must not be empty")

    @property
    def is_development(self) -> bool:
        return self.environment in DEVELOPMENT_ENVIRONMENTS

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(hours=self.token_ttl_hours)

    @classmethod
    def from_environment(cls) -> AppConfig:
        """Create config from environment variables with defaults.

        Raises:
            ValueError: A value fails validation, including a missing
                JWT_SECRET outside development/test.
        """
        environment = os.environ.get("ENVIRONMENT", "development").strip().lower()
        return cls(
            environment=environment,
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            database_url=os.environ.get("DATABASE_URL") or None,
            jwt_secret=os.environ.get("JWT_SECRET") or DEVELOPMENT_JWT_SECRET,
            jwt_algorithm=os.environ.get("JWT_ALGORITHM", "HS256"),
            token_ttl_hours=_get_int_env("TOKEN_TTL_HOURS", 24),
            bcrypt_rounds=_get_int_env("BCRYPT_ROUNDS", 10),
            upload_dir=os.environ.get("UPLOAD_DIR", "uploads"),
            seed_password=os.environ.get("SEED_PASSWORD", "password123"),
            sqlalchemy_echo=_get_bool_env("SQLALCHEMY_ECHO"),
        )


# Fast hashing and a fixed secret for unit tests
TEST_APP_CONFIG = AppConfig(environment="test", bcrypt_rounds=4)
