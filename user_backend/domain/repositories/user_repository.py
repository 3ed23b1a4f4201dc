from abc import ABC, abstractmethod
from typing import List, Optional
from ..models.user import User


class UserRepository(ABC):
    """Repository interface - defines contract for user data access"""

    @abstractmethod
    def is_valid_id(self, user_id: str) -> bool:
        """Whether user_id has the storage's identifier format"""
        pass

    @abstractmethod
    async def find_all(self) -> List[User]:
        """Return every stored user"""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find user by (normalized) email address"""
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Find user by ID"""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save user (create or update), applying the schema rules first"""
        pass

    @abstractmethod
    async def delete_by_id(self, user_id: str) -> bool:
        """Delete user by ID; True if a document was removed"""
        pass
