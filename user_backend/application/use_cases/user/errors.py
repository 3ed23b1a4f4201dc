# External package imports
from pymongo.errors import DuplicateKeyError

# Local application imports
from ....domain.exceptions import AppError, ErrorCode, SchemaValidationError

# Errors the normalization stage already knows how to render; use cases
# re-raise these untouched and wrap everything else.
CLASSIFIED_ERRORS = (AppError, SchemaValidationError, DuplicateKeyError)


def unexpected_error(message: str, field: str, code: ErrorCode, exception: Exception) -> AppError:
    """Wrap an unclassified failure into a 500 AppError keeping the original text"""
    return AppError(message, 500, field, code, [str(exception)])


def invalid_id_error(operation: str) -> AppError:
    return AppError(
        f"{operation} FUNCTION: INVALID USER ID FORMAT!",
        400,
        "id",
        ErrorCode.INVALID_ID,
    )


def user_not_found_error() -> AppError:
    return AppError("USER NOT FOUND!", 404, "id", ErrorCode.USER_NOT_FOUND)
