# Standard library imports
import logging
from typing import Optional

# Local application imports
from ....domain.constants import UserFields
from ....domain.exceptions import AppError, ErrorCode
from ....domain.repositories.user_repository import UserRepository
from ....domain.validators import is_loose_email, normalize_email
from .errors import CLASSIFIED_ERRORS, unexpected_error

module_logger = logging.getLogger(__name__)


class CheckEmailUseCase:
    """Use case for checking whether an email is already registered"""

    def __init__(
        self,
        user_repository: UserRepository,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.user_repository = user_repository
        self.logger = logger or module_logger

    async def execute(self, raw_email: str) -> bool:
        """
        Check email availability

        The format check here is deliberately looser than the one applied
        on registration.

        Args:
            raw_email: Email taken from the request path

        Returns:
            True if a user with the normalized email exists

        Raises:
            AppError: ERR_INVALID_EMAIL (400) or ERR_EMAIL_CHECK_FAILED (500)
        """
        email = normalize_email(raw_email)
        self.logger.debug(f"Checking email {email}")

        if not is_loose_email(email):
            raise AppError("EMAIL IS INVALID!", 400, UserFields.EMAIL, ErrorCode.INVALID_EMAIL)

        try:
            exists = await self.user_repository.find_by_email(email) is not None
        except CLASSIFIED_ERRORS:
            raise
        except Exception as exception:
            self.logger.error(f"Unexpected error checking email {email}: {exception}", exc_info=True)
            raise unexpected_error(
                "ERROR TO CHECK EMAIL!",
                UserFields.EMAIL,
                ErrorCode.EMAIL_CHECK_FAILED,
                exception,
            ) from exception

        if exists:
            self.logger.info(f"Email in use: {email}")
        else:
            self.logger.info(f"Email available: {email}")
        return exists
