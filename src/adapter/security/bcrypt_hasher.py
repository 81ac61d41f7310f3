"""bcrypt implementation of PasswordHasher."""

import base64
import hashlib
from logging import getLogger

import bcrypt

from domain.model.errors import HashingError
from utils.config import DEFAULT_BCRYPT_ROUNDS

logger = getLogger(__name__)


def _prehash(password: str) -> bytes:
    """SHA-256 then base64 the password.

    bcrypt only reads the first 72 bytes (newer releases reject longer
    input), so long passwords are condensed to 44 ASCII bytes first.
    """
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


class BcryptPasswordHasher:
    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        # bcrypt accepts cost 4..31
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be between 4 and 31, got {rounds}")
        self.rounds = rounds

    def hash(self, password: str) -> str:
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")
        except (OSError, ValueError) as e:
            logger.error("Password hashing failed", extra={"error": str(e)})
            raise HashingError("Password hashing failed") from e

    def verify(self, password: str, digest: str) -> bool:
        """Check password against a bcrypt digest; checkpw compares in constant time."""
        try:
            return bcrypt.checkpw(_prehash(password), digest.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False
