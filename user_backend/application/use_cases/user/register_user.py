# Standard library imports
import logging
from typing import Any, Mapping, Optional

# Local application imports
from ....domain.constants import UserFields
from ....domain.exceptions import AppError, ErrorCode
from ....domain.models.user import User
from ....domain.repositories.user_repository import UserRepository
from ....domain.validators import is_valid_person_name, normalize_email, validate_age
from ...dto.user_dto import UserResponse
from ...sanitize import sanitize_body
from .errors import CLASSIFIED_ERRORS, unexpected_error

module_logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    """Use case for registering a new user"""

    def __init__(
        self,
        user_repository: UserRepository,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.user_repository = user_repository
        self.logger = logger or module_logger

    async def execute(self, body: Mapping[str, Any]) -> UserResponse:
        """
        Register a new user

        Checks run in order and the first failure wins: extra fields,
        missing fields, name, age, email uniqueness. Email format and
        password strength are enforced by the User schema rules on save.

        Args:
            body: Raw request body with name, age, email and password

        Returns:
            UserResponse with the created user (no password)

        Raises:
            AppError: On invalid input, email in use, or unexpected failure
            SchemaValidationError: If the User schema rules reject the record
            DuplicateKeyError: If the unique email index rejects the insert
        """
        try:
            return await self._register(body)
        except CLASSIFIED_ERRORS:
            raise
        except Exception as exception:
            self.logger.error(f"Unexpected error registering user: {exception}", exc_info=True)
            raise unexpected_error(
                "UNEXPECTED ERROR IN REGISTER FUNCTION!",
                "register",
                ErrorCode.REGISTER_FAILED,
                exception,
            ) from exception

    async def _register(self, body: Mapping[str, Any]) -> UserResponse:
        fields = sanitize_body(body)

        missing = [
            name for name in UserFields.WRITABLE
            if fields.get(name) is None or not str(fields[name]).strip()
        ]
        if missing:
            self.logger.warning(f"Register rejected, missing fields: {missing}")
            raise AppError("ALL FIELDS NEED TO BE FILLED!", 400, "all", ErrorCode.MISSING_FIELDS, missing)

        name = fields[UserFields.NAME]
        if not is_valid_person_name(name):
            raise AppError("ADD FUNCTION: INVALID NAME!", 400, UserFields.NAME, ErrorCode.INVALID_NAME)

        if not validate_age(fields[UserFields.AGE]):
            raise AppError("ADD FUNCTION: INVALID AGE!", 400, UserFields.AGE, ErrorCode.INVALID_AGE)

        email = normalize_email(fields[UserFields.EMAIL])
        if await self.user_repository.find_by_email(email) is not None:
            self.logger.warning(f"Register rejected, email in use: {email}")
            raise AppError("EMAIL ALREADY IN USE!", 400, UserFields.EMAIL, ErrorCode.EMAIL_IN_USE)

        new_user = User.create(
            name=name,
            age=fields[UserFields.AGE],
            email=email,
            password=fields[UserFields.PASSWORD],
        )
        saved_user = await self.user_repository.save(new_user)
        self.logger.info(f"User registered: {saved_user.id}")
        return UserResponse.from_user(saved_user)
