"""Auth configuration loaded from environment variables."""

import os
from dataclasses import dataclass, field
from datetime import timedelta

DEFAULT_JWT_ALGORITHM = "HS256"
DEFAULT_JWT_EXPIRATION_MINUTES = 60 * 24
DEFAULT_BCRYPT_ROUNDS = 12


@dataclass(frozen=True)
class AuthSettings:
    """Immutable auth configuration, built once at startup.

    The secret is excluded from repr so the settings object can be logged.
    """
    jwt_secret_key: str = field(repr=False)
    jwt_algorithm: str = DEFAULT_JWT_ALGORITHM
    token_ttl: timedelta = timedelta(minutes=DEFAULT_JWT_EXPIRATION_MINUTES)
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS

    @classmethod
    def from_env(cls) -> "AuthSettings":
        secret = os.getenv("JWT_SECRET_KEY")
        if not secret:
            raise ValueError(
                "JWT_SECRET_KEY environment variable is required. "
                "Generate a secure key with: openssl rand -hex 32"
            )
        minutes = int(os.getenv("JWT_EXPIRATION_MINUTES", DEFAULT_JWT_EXPIRATION_MINUTES))
        if minutes <= 0:
            raise ValueError("JWT_EXPIRATION_MINUTES must be positive")

        return cls(
            jwt_secret_key=secret,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", DEFAULT_JWT_ALGORITHM),
            token_ttl=timedelta(minutes=minutes),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS)),
        )
