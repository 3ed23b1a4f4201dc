from .user import (
    RegisterUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
    DeleteUserUseCase,
    CheckEmailUseCase,
)

__all__ = [
    "RegisterUserUseCase",
    "ListUsersUseCase",
    "UpdateUserUseCase",
    "DeleteUserUseCase",
    "CheckEmailUseCase",
]
