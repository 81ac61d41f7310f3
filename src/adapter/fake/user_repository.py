"""In-memory implementation of UserRepository for testing."""

import threading
import uuid
from datetime import datetime
from domain.model.errors import DuplicateIdentityError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        self._lock = threading.Lock()

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str, now: datetime) -> User:
        # Stands in for the unique index: check and insert under one lock
        with self._lock:
            if any(u.email == email for u in self.store.values()):
                raise DuplicateIdentityError("Email already registered")

            user = User(
                id=uuid.uuid4().hex,
                email=email,
                password_hash=password_hash,
                created_at=now,
                updated_at=now,
            )
            self.store[user.id] = user
            return user

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        with self._lock:
            for user in self.store.values():
                if user.email == email:
                    return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        with self._lock:
            return self.store.get(user_id)
