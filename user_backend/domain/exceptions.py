"""
Error taxonomy for the user backend.

AppError is the uniform application error raised by the use cases.
SchemaValidationError is raised by the User schema rules and carries one
message per failing field. Duplicate-key violations come straight from the
MongoDB driver (pymongo.errors.DuplicateKeyError) and are not wrapped.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from enum import Enum
from typing import Dict, List, Optional


# -----------------------------------------------------------------------------
# Error codes
# -----------------------------------------------------------------------------


class ErrorCode(str, Enum):
    """Stable machine-readable error codes returned to API clients."""

    GENERIC = "ERR_GENERIC"

    # Client input (400)
    EXTRA_FIELDS = "ERR_EXTRA_FIELDS"
    MISSING_FIELDS = "ERR_MISSING_FIELDS"
    NO_FIELDS_TO_UPDATE = "ERR_NO_FIELDS_TO_UPDATE"
    NO_CHANGES = "ERR_NO_CHANGES"
    INVALID_ID = "ERR_INVALID_ID"
    INVALID_NAME = "ERR_INVALID_NAME"
    INVALID_AGE = "ERR_INVALID_AGE"
    INVALID_EMAIL = "ERR_INVALID_EMAIL"
    INVALID_PASSWORD = "ERR_INVALID_PASSWORD"

    # Conflict (400)
    EMAIL_IN_USE = "ERR_EMAIL_IN_USE"

    # Not found (404)
    USER_NOT_FOUND = "ERR_USER_NOT_FOUND"

    # Unexpected failures (500)
    REGISTER_FAILED = "ERR_REGISTER_FAILED"
    CHECKUSER_FAILED = "ERR_CHECKUSER_FAILED"
    UPDATE_FAILED = "ERR_UPDATE_FAILED"
    DELETE_FAILED = "ERR_DELETE_FAILED"
    EMAIL_CHECK_FAILED = "ERR_EMAIL_CHECK_FAILED"


# -----------------------------------------------------------------------------
# Application errors
# -----------------------------------------------------------------------------


class AppError(Exception):
    """Application error carrying HTTP status, offending field, code and sub-errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        field: Optional[str] = None,
        code: "ErrorCode | str" = ErrorCode.GENERIC,
        errors: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.field = field
        self.code = code.value if isinstance(code, ErrorCode) else code
        self.errors = errors

    def __repr__(self) -> str:
        return f"AppError({self.message!r}, status_code={self.status_code}, code={self.code!r})"


# -----------------------------------------------------------------------------
# Schema validation
# -----------------------------------------------------------------------------


class SchemaValidationError(Exception):
    """Raised by the User schema rules; maps each failing field to its message."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {message}" for field, message in self.errors.items()))

    @property
    def messages(self) -> List[str]:
        return list(self.errors.values())
