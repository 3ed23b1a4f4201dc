from .register_user import RegisterUserUseCase
from .list_users import ListUsersUseCase
from .update_user import UpdateUserUseCase
from .delete_user import DeleteUserUseCase
from .check_email import CheckEmailUseCase

__all__ = [
    "RegisterUserUseCase",
    "ListUsersUseCase",
    "UpdateUserUseCase",
    "DeleteUserUseCase",
    "CheckEmailUseCase",
]
