"""Centralized error normalization for the FastAPI application.

Every failure ends up here and leaves as one of four JSON shapes, chosen by
the kind of error:

    AppError               -> {success, status: "Error", message, field, code, errors}
    schema validation      -> {status: "error", message: "VALIDATION ERROR", errors}
    duplicate key (11000)  -> {status: "error", message, field, value, code}
    anything else          -> {success, status: "Unknown error", message, error}

Usage:
    from user_backend.api.error_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
import re
from functools import singledispatch
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError

from ..domain.exceptions import AppError, SchemaValidationError

logger = logging.getLogger(__name__)

ErrorResponse = Tuple[int, Dict[str, Any]]

# e.g. 'E11000 duplicate key error collection: db.users index: email_1 dup key: { email: "a@b.com" }'
_DUP_KEY_MESSAGE = re.compile(r'dup key: \{\s*(?P<field>[^:\s]+)\s*:\s*"?(?P<value>.*?)"?\s*\}')
_JSON_SCALARS = (str, int, float, bool, type(None))


# =============================================================================
# Classification
# =============================================================================


@singledispatch
def normalize_error(exc: Exception) -> ErrorResponse:
    """Map an error to (HTTP status, JSON body). Unknown kinds become a 500."""
    return status.HTTP_500_INTERNAL_SERVER_ERROR, {
        "success": False,
        "status": "Unknown error",
        "message": "INTERNAL SERVER ERROR!",
        "error": str(exc),
    }


@normalize_error.register
def _normalize_app_error(exc: AppError) -> ErrorResponse:
    return exc.status_code, {
        "success": False,
        "status": "Error",
        "message": exc.message,
        "field": exc.field,
        "code": exc.code,
        "errors": exc.errors or [],
    }


def _validation_body(messages: list) -> Dict[str, Any]:
    return {
        "status": "error",
        "message": "VALIDATION ERROR",
        "errors": messages,
    }


@normalize_error.register
def _normalize_schema_error(exc: SchemaValidationError) -> ErrorResponse:
    return status.HTTP_400_BAD_REQUEST, _validation_body(exc.messages)


@normalize_error.register
def _normalize_request_validation_error(exc: RequestValidationError) -> ErrorResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return status.HTTP_400_BAD_REQUEST, _validation_body(messages)


def duplicate_key_field(exc: DuplicateKeyError) -> Tuple[str, Any]:
    """
    Extract the offending field and value from a duplicate-key error

    Prefers the structured keyPattern/keyValue details and falls back to
    parsing the server message.
    """
    details: Dict[str, Any] = exc.details or {}
    key_pattern: Optional[Dict[str, Any]] = details.get("keyPattern")
    if key_pattern:
        field = next(iter(key_pattern))
        value = (details.get("keyValue") or {}).get(field)
        return field, value

    match = _DUP_KEY_MESSAGE.search(str(details.get("errmsg") or exc))
    if match:
        return match.group("field"), match.group("value")
    return "field", None


@normalize_error.register
def _normalize_duplicate_key(exc: DuplicateKeyError) -> ErrorResponse:
    field, value = duplicate_key_field(exc)
    if not isinstance(value, _JSON_SCALARS):
        value = str(value)
    return status.HTTP_400_BAD_REQUEST, {
        "status": "error",
        "message": f"{field.upper()} IS ALREADY IN USE!",
        "field": field,
        "value": value,
        "code": f"ERR_{field.upper()}_IN_USE",
    }


# =============================================================================
# FastAPI wiring
# =============================================================================


async def handle_error(request: Request, exc: Exception) -> JSONResponse:
    """Terminal handler: log, classify and render any error"""
    status_code, body = normalize_error(exc)

    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
    else:
        logger.warning(
            f"{type(exc).__name__} on {request.method} {request.url.path}: "
            f"{body.get('message')} (code={body.get('code')}, status={status_code})"
        )

    return JSONResponse(status_code=status_code, content=body)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the error normalization stage for every error kind"""
    for exc_class in (
        AppError,
        SchemaValidationError,
        DuplicateKeyError,
        RequestValidationError,
        Exception,
    ):
        app.add_exception_handler(exc_class, handle_error)
