# Standard library imports
import logging
from typing import Optional

# Local application imports
from ....domain.exceptions import ErrorCode
from ....domain.repositories.user_repository import UserRepository
from .errors import CLASSIFIED_ERRORS, invalid_id_error, unexpected_error, user_not_found_error

module_logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """Use case for deleting a user by ID"""

    def __init__(
        self,
        user_repository: UserRepository,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.user_repository = user_repository
        self.logger = logger or module_logger

    async def execute(self, user_id: str) -> None:
        try:
            if not self.user_repository.is_valid_id(user_id):
                raise invalid_id_error("DELETE")

            if await self.user_repository.find_by_id(user_id) is None:
                raise user_not_found_error()

            await self.user_repository.delete_by_id(user_id)
            self.logger.info(f"User deleted: {user_id}")
        except CLASSIFIED_ERRORS:
            raise
        except Exception as exception:
            self.logger.error(f"Unexpected error deleting user {user_id}: {exception}", exc_info=True)
            raise unexpected_error(
                "UNEXPECTED ERROR IN DELETE FUNCTION!",
                "delete",
                ErrorCode.DELETE_FAILED,
                exception,
            ) from exception
