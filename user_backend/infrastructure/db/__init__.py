from .mongo_connection import close_database, ensure_user_indexes, get_database, get_user_collection
from .mongo_user_repository import MongoUserRepository

__all__ = [
    "close_database",
    "ensure_user_indexes",
    "get_database",
    "get_user_collection",
    "MongoUserRepository",
]
