# Standard library imports
import logging
from typing import Any, Dict, Optional

# External package imports
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

# Local application imports
from ...application.dto.user_dto import SuccessEnvelope

logger = logging.getLogger(__name__)


def success_response(
    message: str = "Success",
    data: Any = None,
    status_code: int = status.HTTP_200_OK,
    meta: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """
    Wrap a successful result in the uniform success envelope

    Args:
        message: Human-readable outcome
        data: Payload (defaults to an empty object)
        status_code: 2xx HTTP status
        meta: Extra information about the payload

    Returns:
        JSONResponse with {success, status, message, data, meta, timeStamp}
    """
    envelope = SuccessEnvelope(
        message=message,
        data=data if data is not None else {},
        meta=meta or {},
    )
    logger.info(f"{message} (StatusCode: {status_code})")
    logger.debug(f"Data: {envelope.data} | Timestamp: {envelope.timestamp}")
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(envelope.model_dump(by_alias=True)),
    )
