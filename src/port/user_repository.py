from datetime import datetime
from typing import Protocol

from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def create(self, email: str, password_hash: str, now: datetime) -> User:
        """Persist a new user and return it.

        Raises DuplicateIdentityError if the email is taken. The check and the
        insert must be a single atomic operation inside the store.
        """
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by normalized email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...
