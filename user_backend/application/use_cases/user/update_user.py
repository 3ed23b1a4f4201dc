# Standard library imports
import logging
from typing import Any, Dict, Mapping, Optional

# Local application imports
from ....core.security import verify_password
from ....domain.constants import UserFields
from ....domain.exceptions import AppError, ErrorCode
from ....domain.models.user import User
from ....domain.repositories.user_repository import UserRepository
from ....domain.validators import (
    is_valid_person_name,
    normalize_email,
    to_age,
    validate_age,
    validate_password,
)
from ...sanitize import sanitize_body
from .errors import CLASSIFIED_ERRORS, invalid_id_error, unexpected_error, user_not_found_error

module_logger = logging.getLogger(__name__)


class UpdateUserUseCase:
    """Use case for partially updating an existing user"""

    def __init__(
        self,
        user_repository: UserRepository,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.user_repository = user_repository
        self.logger = logger or module_logger

    async def execute(self, user_id: str, body: Mapping[str, Any]) -> None:
        """
        Update any subset of name, age, email and password

        Args:
            user_id: Identifier from the request path
            body: Partial request body

        Raises:
            AppError: On invalid id, unknown user, invalid fields, email in use,
                nothing to change, or unexpected failure
            SchemaValidationError: If the User schema rules reject the result
            DuplicateKeyError: If the unique email index rejects the update
        """
        try:
            await self._update(user_id, body)
        except CLASSIFIED_ERRORS:
            raise
        except Exception as exception:
            self.logger.error(f"Unexpected error updating user {user_id}: {exception}", exc_info=True)
            raise unexpected_error(
                "UNEXPECTED ERROR IN UPDATE FUNCTION!",
                "update",
                ErrorCode.UPDATE_FAILED,
                exception,
            ) from exception

    async def _update(self, user_id: str, body: Mapping[str, Any]) -> None:
        if not self.user_repository.is_valid_id(user_id):
            raise invalid_id_error("UPDATE")

        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise user_not_found_error()

        fields: Dict[str, Any] = {
            key: value for key, value in sanitize_body(body).items() if value is not None
        }
        if not fields:
            raise AppError(
                "AT LEAST ONE FIELD NEED TO BE FILLED!",
                400,
                "all",
                ErrorCode.NO_FIELDS_TO_UPDATE,
            )

        changed = False
        if UserFields.NAME in fields:
            changed |= self._apply_name(user, fields[UserFields.NAME])
        if UserFields.AGE in fields:
            changed |= self._apply_age(user, fields[UserFields.AGE])
        if UserFields.PASSWORD in fields:
            changed |= self._apply_password(user, fields[UserFields.PASSWORD])
        if UserFields.EMAIL in fields:
            changed |= await self._apply_email(user, fields[UserFields.EMAIL])

        if not changed:
            raise AppError("ANYTHING HAS CHANGED!", 400, None, ErrorCode.NO_CHANGES)

        await self.user_repository.save(user)
        self.logger.info(f"User updated: {user.id}")

    def _apply_name(self, user: User, name: Any) -> bool:
        if not is_valid_person_name(name):
            raise AppError("UPDATE FUNCTION: INVALID NAME!", 400, UserFields.NAME, ErrorCode.INVALID_NAME)
        name = name.strip()
        if name == user.name:
            return False
        user.name = name
        return True

    def _apply_age(self, user: User, age: Any) -> bool:
        if age == "" or not validate_age(age):
            raise AppError("UPDATE FUNCTION: INVALID AGE!", 400, UserFields.AGE, ErrorCode.INVALID_AGE)
        age = to_age(age)
        if age == user.age:
            return False
        user.age = age
        return True

    async def _apply_email(self, user: User, email: Any) -> bool:
        email = normalize_email(email)
        if email == user.email:
            return False
        owner = await self.user_repository.find_by_email(email)
        if owner is not None and owner.id != user.id:
            raise AppError("EMAIL IS ALREADY IN USE!", 400, UserFields.EMAIL, ErrorCode.EMAIL_IN_USE)
        user.email = email
        return True

    def _apply_password(self, user: User, password: Any) -> bool:
        # Same plaintext as the stored hash: nothing to rehash
        if verify_password(password, user.password):
            return False
        if not validate_password(password):
            raise AppError(
                "UPDATE FUNCTION: INVALID PASSWORD!",
                400,
                UserFields.PASSWORD,
                ErrorCode.INVALID_PASSWORD,
            )
        user.set_password(password)
        return True
