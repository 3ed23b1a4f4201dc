# Standard library imports
import logging
from typing import List, Optional

# Local application imports
from ....domain.exceptions import ErrorCode
from ....domain.repositories.user_repository import UserRepository
from ...dto.user_dto import UserResponse
from .errors import CLASSIFIED_ERRORS, unexpected_error

module_logger = logging.getLogger(__name__)


class ListUsersUseCase:
    """Use case for listing every registered user"""

    def __init__(
        self,
        user_repository: UserRepository,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.user_repository = user_repository
        self.logger = logger or module_logger

    async def execute(self) -> List[UserResponse]:
        try:
            users = await self.user_repository.find_all()
            responses = [UserResponse.from_user(user) for user in users]
        except CLASSIFIED_ERRORS:
            raise
        except Exception as exception:
            self.logger.error(f"Unexpected error listing users: {exception}", exc_info=True)
            raise unexpected_error(
                "UNEXPECTED ERROR IN CHECKUSERS FUNCTION!",
                "users",
                ErrorCode.CHECKUSER_FAILED,
                exception,
            ) from exception

        self.logger.debug(f"Found {len(responses)} user(s)")
        return responses
