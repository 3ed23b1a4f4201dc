# Standard library imports
from typing import Any, Dict, Iterable, Mapping

# Local application imports
from ..domain.constants import UserFields
from ..domain.exceptions import AppError, ErrorCode


def sanitize_body(
    body: Mapping[str, Any],
    allowed: Iterable[str] = UserFields.WRITABLE,
) -> Dict[str, Any]:
    """
    Keep only the allowed keys of a request body

    Args:
        body: Raw request body
        allowed: Field names the operation accepts

    Returns:
        New dict holding only the allowed keys present in body

    Raises:
        AppError: ERR_EXTRA_FIELDS (400) naming every key outside the allow-list
    """
    allowed_keys = set(allowed)
    extra_keys = [key for key in body if key not in allowed_keys]
    if extra_keys:
        raise AppError(
            f"EXTRA FIELDS ARE NOT ALLOWED: {', '.join(extra_keys)}",
            400,
            ", ".join(extra_keys),
            ErrorCode.EXTRA_FIELDS,
            extra_keys,
        )
    return {key: value for key, value in body.items() if key in allowed_keys}
