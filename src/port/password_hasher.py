from typing import Protocol


class PasswordHasher(Protocol):
    """Protocol for one-way, salted password hashing."""
    def hash(self, password: str) -> str:
        """Return a salted digest. Raises HashingError only on internal failure."""
        ...

    def verify(self, password: str, digest: str) -> bool:
        """Return True iff password matches digest. Never raises on mismatch."""
        ...
