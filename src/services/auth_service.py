"""Auth service: registration and login business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
import secrets
from datetime import datetime, timezone
from functools import lru_cache

from domain.model.errors import DuplicateIdentityError, InvalidCredentialsError
from port.password_hasher import PasswordHasher
from port.token_service import TokenService
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup."""
    return email.strip().lower()


@lru_cache(maxsize=8)
def prepare_decoy_digest(hasher: PasswordHasher) -> str:
    """A digest no client knows the password of, in hasher's own format."""
    return hasher.hash(secrets.token_urlsafe(32))


def register(
    repo: UserRepository,
    hasher: PasswordHasher,
    email: str,
    password: str,
    now: datetime | None = None,
) -> str:
    """Register a new user and return its ID.

    The lookup is only a fast path; the repository's create() is what
    rejects a concurrent duplicate.

    Raises:
        DuplicateIdentityError: email already registered
        HashingError: hasher failed
        StoreError: repository failed
    """
    email = normalize_email(email)

    if repo.get_by_email(email):
        raise DuplicateIdentityError("Email already registered")

    password_hash = hasher.hash(password)
    user = repo.create(
        email=email,
        password_hash=password_hash,
        now=now or datetime.now(timezone.utc),
    )

    logger.info("User registered", extra={"userId": user.id, "email": email})
    return user.id


def login(
    repo: UserRepository,
    hasher: PasswordHasher,
    tokens: TokenService,
    email: str,
    password: str,
    now: datetime | None = None,
) -> str:
    """Authenticate by email and password and return a bearer token.

    Unknown email and wrong password raise the same error, and both paths
    run one hash verification so response time does not reveal which.

    Raises:
        InvalidCredentialsError: invalid credentials (deliberately vague)
        StoreError: repository failed
    """
    email = normalize_email(email)

    user = repo.get_by_email(email)
    if user is None:
        hasher.verify(password, prepare_decoy_digest(hasher))
        logger.info("Login failed", extra={"email": email, "reason": "unknown_email"})
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    if not hasher.verify(password, user.password_hash):
        logger.info("Login failed", extra={"email": email, "reason": "wrong_password"})
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    token = tokens.issue(user.id, now)
    logger.info("User logged in", extra={"userId": user.id, "email": email})
    return token
