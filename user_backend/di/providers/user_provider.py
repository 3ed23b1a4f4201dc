from typing import TYPE_CHECKING
from ...domain.repositories.user_repository import UserRepository
from ...application.use_cases.user.register_user import RegisterUserUseCase
from ...application.use_cases.user.list_users import ListUsersUseCase
from ...application.use_cases.user.update_user import UpdateUserUseCase
from ...application.use_cases.user.delete_user import DeleteUserUseCase
from ...application.use_cases.user.check_email import CheckEmailUseCase

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class UserProvider:
    """User use case provider - registers all user management use cases"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all user use cases.
        Use cases are created on-demand via factories.
        """
        for use_case_class in (
            RegisterUserUseCase,
            ListUsersUseCase,
            UpdateUserUseCase,
            DeleteUserUseCase,
            CheckEmailUseCase,
        ):
            container.register_factory(
                use_case_class,
                lambda use_case_class=use_case_class: use_case_class(
                    user_repository=container.get(UserRepository)
                )
            )
