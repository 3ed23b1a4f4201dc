# Standard library imports
from typing import Callable, List, Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

# Local application imports
from ...core.security import hash_password
from ...domain.constants import UserFields
from ...domain.exceptions import SchemaValidationError
from ...domain.models.user import User
from ...domain.repositories.user_repository import UserRepository
from .mongo_connection import get_user_collection


class MongoUserRepository(UserRepository):
    """MongoDB implementation of UserRepository"""

    def __init__(
        self,
        user_collection: Optional[AsyncIOMotorCollection] = None,
        password_hasher: Callable[[str], str] = hash_password,
    ) -> None:
        self.user_collection = user_collection if user_collection is not None else get_user_collection()
        self.password_hasher = password_hasher

    def is_valid_id(self, user_id: str) -> bool:
        return isinstance(user_id, str) and ObjectId.is_valid(user_id)

    async def find_all(self) -> List[User]:
        """
        Return every stored user

        Returns:
            List of User domain models (possibly empty)
        """
        try:
            documents = await self.user_collection.find({}).to_list(length=None)
        except Exception as e:
            raise RuntimeError(f"Error listing users: {str(e)}") from e
        return [self._document_to_user(document) for document in documents]

    async def find_by_email(self, email: str) -> Optional[User]:
        """
        Find user by email address

        Args:
            email: Normalized email address to search for

        Returns:
            User domain model if found, None otherwise
        """
        if not email:
            return None

        try:
            document = await self.user_collection.find_one({UserFields.EMAIL: email})
        except Exception as e:
            raise RuntimeError(f"Error finding user by email: {str(e)}") from e
        if document is None:
            return None
        return self._document_to_user(document)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        """
        Find user by ID

        Args:
            user_id: User ID to search for

        Returns:
            User domain model if found, None otherwise (including malformed IDs)
        """
        if not self.is_valid_id(user_id):
            return None

        try:
            document = await self.user_collection.find_one({UserFields.MONGO_ID: ObjectId(user_id)})
        except Exception as e:
            raise RuntimeError(f"Error finding user by ID: {str(e)}") from e
        if document is None:
            return None
        return self._document_to_user(document)

    async def save(self, user: User) -> User:
        """
        Save user (create new or update existing)

        Runs the User schema rules and the password hashing hook first.

        Args:
            user: User domain model to save

        Returns:
            Saved User domain model with ID set

        Raises:
            SchemaValidationError: If the schema rules reject the user
            DuplicateKeyError: If the unique email index rejects the write
        """
        if not user:
            raise ValueError("User cannot be None")

        user.prepare_for_save(self.password_hasher)
        user_dict = self._user_to_dict(user)

        try:
            if user.id:
                # Update existing user
                object_id = ObjectId(user.id)
                update_result = await self.user_collection.update_one(
                    {UserFields.MONGO_ID: object_id},
                    {"$set": user_dict},
                )
                if update_result.matched_count == 0:
                    raise ValueError(f"User with ID {user.id} not found")
                return user

            # Create new user
            result = await self.user_collection.insert_one(user_dict)
            user.id = str(result.inserted_id)
            return user
        except (DuplicateKeyError, SchemaValidationError, ValueError):
            raise
        except Exception as e:
            raise RuntimeError(f"Error saving user: {str(e)}") from e

    async def delete_by_id(self, user_id: str) -> bool:
        """
        Delete user by ID

        Args:
            user_id: User ID to delete

        Returns:
            True if a document was deleted
        """
        if not self.is_valid_id(user_id):
            return False

        try:
            result = await self.user_collection.delete_one({UserFields.MONGO_ID: ObjectId(user_id)})
        except Exception as e:
            raise RuntimeError(f"Error deleting user: {str(e)}") from e
        return result.deleted_count > 0

    def _document_to_user(self, document: dict) -> User:
        """
        Convert MongoDB document to User domain model

        Args:
            document: MongoDB document dictionary

        Returns:
            User domain model holding the stored password hash
        """
        if not document or UserFields.MONGO_ID not in document:
            raise ValueError("Invalid document: missing _id field")

        return User(
            id=str(document[UserFields.MONGO_ID]),
            name=document.get(UserFields.NAME, ""),
            age=document.get(UserFields.AGE),
            email=document.get(UserFields.EMAIL, ""),
            password=document.get(UserFields.PASSWORD, ""),
        )

    def _user_to_dict(self, user: User) -> dict:
        """
        Convert User domain model to MongoDB document (without _id)

        Args:
            user: User domain model

        Returns:
            Dictionary ready for MongoDB storage
        """
        return {
            UserFields.NAME: user.name,
            UserFields.AGE: user.age,
            UserFields.EMAIL: user.email,
            UserFields.PASSWORD: user.password,
        }
