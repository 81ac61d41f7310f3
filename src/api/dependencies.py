import logging
import threading
from functools import lru_cache

from fastapi import Depends, HTTPException
from pymongo.database import Database

from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.indexes import ensure_all_indexes
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.security.bcrypt_hasher import BcryptPasswordHasher
from adapter.security.jwt_token_service import JWTTokenService
from port.password_hasher import PasswordHasher
from port.token_service import TokenService
from port.user_repository import UserRepository
from utils.config import AuthSettings

logger = logging.getLogger(__name__)

_indexes_lock = threading.Lock()
_indexes_ready = False


def ensure_user_indexes(db: Database) -> bool:
    """Ensure the store's indexes once per process; retried until it succeeds.

    Without the unique email index, concurrent registrations could create
    two accounts for one email, so the store is not served until it exists.
    """
    global _indexes_ready
    if _indexes_ready:
        return True
    with _indexes_lock:
        if not _indexes_ready:
            _indexes_ready = ensure_all_indexes(db)
    return _indexes_ready


def _get_db():
    """Get MongoDB database, raising 503 if unavailable or not yet indexed."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    db = client[DATABASE_NAME]
    if not ensure_user_indexes(db):
        logger.error("Refusing store access: unique email index missing")
        raise HTTPException(status_code=503, detail="Database unavailable")
    return db


@lru_cache
def get_settings() -> AuthSettings:
    """Auth settings, read from the environment on first use only."""
    return AuthSettings.from_env()


@lru_cache
def _bcrypt_hasher(rounds: int) -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=rounds)


@lru_cache
def _jwt_token_service(settings: AuthSettings) -> JWTTokenService:
    return JWTTokenService(settings)


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_password_hasher(settings: AuthSettings = Depends(get_settings)) -> PasswordHasher:
    return _bcrypt_hasher(settings.bcrypt_rounds)


def get_token_service(settings: AuthSettings = Depends(get_settings)) -> TokenService:
    return _jwt_token_service(settings)
