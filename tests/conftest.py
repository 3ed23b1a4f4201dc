"""
Shared pytest fixtures for user backend tests.
"""
import dataclasses
import os
from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from user_backend.core.config import reset_settings
from user_backend.core.security import hash_password
from user_backend.di.base_container import BaseContainer
from user_backend.di.providers.user_provider import UserProvider
from user_backend.domain.models.user import User
from user_backend.domain.repositories.user_repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """UserRepository kept in a dict; enforces the unique email index like MongoDB does."""

    def __init__(self) -> None:
        self.documents: Dict[str, User] = {}

    def is_valid_id(self, user_id: str) -> bool:
        return isinstance(user_id, str) and ObjectId.is_valid(user_id)

    async def find_all(self) -> List[User]:
        return [dataclasses.replace(user) for user in self.documents.values()]

    async def find_by_email(self, email: str) -> Optional[User]:
        for user in self.documents.values():
            if user.email == email:
                return dataclasses.replace(user)
        return None

    async def find_by_id(self, user_id: str) -> Optional[User]:
        user = self.documents.get(user_id)
        return dataclasses.replace(user) if user else None

    async def save(self, user: User) -> User:
        user.prepare_for_save(hash_password)
        for other in self.documents.values():
            if other.email == user.email and other.id != user.id:
                raise DuplicateKeyError(
                    f'E11000 duplicate key error collection: test.users index: email_unique '
                    f'dup key: {{ email: "{user.email}" }}',
                    11000,
                    {
                        "code": 11000,
                        "keyPattern": {"email": 1},
                        "keyValue": {"email": user.email},
                    },
                )
        if not user.id:
            user.id = str(ObjectId())
        self.documents[user.id] = dataclasses.replace(user)
        return user

    async def delete_by_id(self, user_id: str) -> bool:
        return self.documents.pop(user_id, None) is not None


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "USE_LOCAL_DB": "true",
        "LOCAL_MONGO_URI": "mongodb://localhost:27017",
        "MONGO_DB_NAME": "test_user_db",
        "BCRYPT_ROUNDS": "4",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        reset_settings()
        yield env_vars
    reset_settings()


@pytest.fixture
def mock_user_repo():
    """Mock UserRepository with async methods and a real id format check."""
    repo = AsyncMock(spec=UserRepository)
    repo.is_valid_id = MagicMock(side_effect=lambda user_id: ObjectId.is_valid(user_id))
    return repo


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def container(user_repo) -> BaseContainer:
    """Container wired like DIContainer but over the in-memory repository."""
    test_container = BaseContainer()
    test_container.register_singleton(UserRepository, user_repo)
    UserProvider.register(test_container)
    return test_container


@pytest.fixture
def client(container):
    """Create test client with the in-memory container (lifespan not started)."""
    from fastapi.testclient import TestClient
    from user_backend.main import app

    with patch("user_backend.api.v1.user_controller.get_container", return_value=container), patch(
        "user_backend.api.v1.email_controller.get_container", return_value=container
    ):
        yield TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def stored_user():
    """Factory for users as loaded from storage: hashed password, not modified."""
    def _make(
        name: str = "Test User",
        age: int = 25,
        email: str = "test@example.com",
        password: str = "Valid@123!",
        user_id: Optional[str] = None,
    ) -> User:
        return User(
            id=user_id or str(ObjectId()),
            name=name,
            age=age,
            email=email,
            password=hash_password(password),
        )
    return _make
