"""Shared wiring for API tests: fakes in place of MongoDB and bcrypt."""

from datetime import timedelta

from adapter.fake.password_hasher import FakePasswordHasher
from adapter.fake.user_repository import FakeUserRepository
from api.dependencies import get_password_hasher, get_settings, get_user_repo
from api.main import app
from utils.config import AuthSettings

TEST_SETTINGS = AuthSettings(jwt_secret_key='test-secret', token_ttl=timedelta(hours=1))


def install_fakes() -> FakeUserRepository:
    """Override app dependencies with fakes. Returns the fake repository."""
    repo = FakeUserRepository()
    hasher = FakePasswordHasher()
    app.dependency_overrides[get_settings] = lambda: TEST_SETTINGS
    app.dependency_overrides[get_user_repo] = lambda: repo
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    return repo


def tamper(token: str, index: int | None = None) -> str:
    """Change one character of the signature segment (middle by default)."""
    header, claims, signature = token.split('.')
    if index is None:
        index = len(signature) // 2
    index %= len(signature)
    replacement = 'A' if signature[index] != 'A' else 'B'
    return '.'.join([header, claims, signature[:index] + replacement + signature[index + 1:]])
