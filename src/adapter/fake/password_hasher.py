"""Fast salted SHA-256 PasswordHasher for tests.

Digest format: ``fake$<salt hex>$<sha256 hex>``.
"""

import hashlib
import hmac
import secrets

PREFIX = "fake"


class FakePasswordHasher:
    def hash(self, password: str) -> str:
        salt = secrets.token_hex(8)
        return f"{PREFIX}${salt}${self._digest(salt, password)}"

    def verify(self, password: str, digest: str) -> bool:
        try:
            prefix, salt, expected = digest.split("$")
        except (ValueError, AttributeError):
            return False
        if prefix != PREFIX:
            return False
        return hmac.compare_digest(self._digest(salt, password), expected)

    @staticmethod
    def _digest(salt: str, password: str) -> str:
        return hashlib.sha256(f"{salt}{password}".encode("utf-8")).hexdigest()
