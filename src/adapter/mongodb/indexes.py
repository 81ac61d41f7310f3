"""MongoDB index management utilities.

Shared index creation with conflict resolution, used by each MongoXxxRepository.
"""

from logging import getLogger

from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = getLogger(__name__)


def create_index_safe(collection: Collection, keys: list, name: str, **kwargs) -> bool:
    """Create index, replacing a conflicting one.

    Handles two conflict scenarios:
    - Same name but different key spec or options (e.g. unique added later)
    - Same key spec but different name (rename)
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise
        return _resolve_conflict(collection, keys, name, **kwargs)


def _resolve_conflict(collection: Collection, keys: list, name: str, **kwargs) -> bool:
    keys_dict = dict(keys)

    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue

        same_name = idx_name == name
        same_keys = dict(idx_info.get('key', [])) == keys_dict

        if same_name or same_keys:
            logger.warning("Dropping conflicting index", extra={"index": idx_name})
            collection.drop_index(idx_name)
            collection.create_index(keys, name=name, **kwargs)
            logger.info("Recreated index", extra={"index": name})
            return True

    logger.error("Failed to resolve index conflict", extra={"index": name})
    return False


def ensure_all_indexes(db: Database) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.user_repository import MongoUserRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
    ]
    return all(results)
