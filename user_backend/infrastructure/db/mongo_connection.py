# Standard library imports
import logging
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorCollection
from pymongo import ASCENDING

# Local application imports
from ...core.config import get_settings
from ...domain.constants import UserFields

logger = logging.getLogger(__name__)

USER_COLLECTION_NAME = "users"
USER_EMAIL_INDEX_NAME = "email_unique"

# Global MongoDB connection instances (singleton pattern)
_mongo_client: Optional[AsyncIOMotorClient] = None
_mongo_database: Optional[AsyncIOMotorDatabase] = None


def get_database() -> AsyncIOMotorDatabase:
    """
    Get MongoDB database instance (singleton pattern)

    The client connects lazily; no network traffic happens here.

    Returns:
        MongoDB database instance
    """
    global _mongo_client, _mongo_database

    if _mongo_database is not None:
        return _mongo_database

    settings = get_settings()
    _mongo_client = AsyncIOMotorClient(
        settings.mongo_uri,
        maxPoolSize=settings.mongo_max_pool_size,
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
    )
    _mongo_database = _mongo_client[settings.mongo_database_name]
    logger.info(f"MongoDB client created ({settings.mongo_label})")
    return _mongo_database


def get_user_collection() -> AsyncIOMotorCollection:
    """
    Get users collection from MongoDB

    Returns:
        MongoDB collection for users
    """
    return get_database()[USER_COLLECTION_NAME]


async def ensure_user_indexes(user_collection: Optional[AsyncIOMotorCollection] = None) -> None:
    """
    Ping the server and create the unique email index

    The index is what guarantees one user per email when two registrations
    race past the application-level pre-check.

    Args:
        user_collection: Collection to index (defaults to the users collection)
    """
    collection = user_collection if user_collection is not None else get_user_collection()
    await collection.database.client.admin.command("ping")
    await collection.create_index(
        [(UserFields.EMAIL, ASCENDING)],
        unique=True,
        name=USER_EMAIL_INDEX_NAME,
    )
    logger.info("MongoDB reachable, unique email index ensured")


def close_database() -> None:
    """Close the MongoDB client and forget the singletons"""
    global _mongo_client, _mongo_database

    if _mongo_client is not None:
        _mongo_client.close()
        logger.info("MongoDB client closed")
    _mongo_client = None
    _mongo_database = None
