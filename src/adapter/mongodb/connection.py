"""Shared MongoClient for the users store.

One pooled client serves every request. A failed connect is remembered
only for RETRY_INTERVAL_SECONDS, so a database that comes up after the
service (or a MONGO_URL fixed in the environment) is picked up without a
restart, while an outage doesn't pay the server selection timeout on
every request.
"""

import os
import logging
import time

from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'authkit')
USERS_COLLECTION_NAME = 'users'
RETRY_INTERVAL_SECONDS = 5.0

_client_cache: MongoClient | None = None
_retry_after = 0.0


def reset_client():
    """Drop the cached client and any pending backoff."""
    global _client_cache, _retry_after
    if _client_cache is not None:
        _client_cache.close()
    _client_cache = None
    _retry_after = 0.0


def _connect(url: str) -> MongoClient:
    client = MongoClient(
        url,
        serverSelectionTimeoutMS=5000,
        connectTimeoutMS=5000,
        socketTimeoutMS=30000,
        maxPoolSize=50,
        minPoolSize=0,
        maxIdleTimeMS=30000,
        waitQueueTimeoutMS=10000,
        retryWrites=True,
        retryReads=True,
        tz_aware=True,  # created_at/updated_at come back as UTC-aware datetimes
    )
    try:
        client.admin.command('ping')
    except PyMongoError:
        client.close()
        raise
    return client


def get_mongodb_client() -> MongoClient | None:
    """Return a live client, or None while the database is unreachable.

    A cached client is re-pinged on each call and replaced when the ping
    fails. After a failed connect, calls return None until the retry
    interval has passed.
    """
    global _client_cache, _retry_after

    if _client_cache is not None:
        try:
            _client_cache.admin.command('ping')
            return _client_cache
        except PyMongoError as e:
            logger.warning("Cached MongoDB client failed ping", extra={"error": str(e)[:200]})
            _client_cache.close()
            _client_cache = None

    now = time.monotonic()
    if now < _retry_after:
        return None

    # Read per attempt so a corrected environment takes effect on retry
    url = os.getenv('MONGO_URL')
    if not url:
        logger.error("MONGO_URL not configured")
        _retry_after = now + RETRY_INTERVAL_SECONDS
        return None

    try:
        client = _connect(url)
    except PyMongoError as e:
        logger.error(
            "MongoDB connection failed",
            extra={"error": str(e)[:200], "retryInSeconds": RETRY_INTERVAL_SECONDS},
        )
        _retry_after = now + RETRY_INTERVAL_SECONDS
        return None

    _client_cache = client
    _retry_after = 0.0
    logger.info("Connected to MongoDB", extra={"database": DATABASE_NAME})
    return client
