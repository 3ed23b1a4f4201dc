# External package imports
from fastapi import APIRouter
from fastapi.responses import JSONResponse

# Local application imports
from ...application.dto.user_dto import EmailCheckResponse
from ...application.use_cases.user.check_email import CheckEmailUseCase
from ...domain.validators import normalize_email
from ...di.container import get_container
from .responses import success_response


router = APIRouter(tags=["email"])


@router.get("/checkEmail/{email}")
async def check_email(email: str) -> JSONResponse:
    """
    Check whether an email is already registered

    Args:
        email: Email to look up (trimmed and lowercased before the check)

    Returns:
        200 success envelope with {exists: bool}
    """
    container = get_container()
    check_email_use_case = container.get(CheckEmailUseCase)

    exists = await check_email_use_case.execute(email)
    return success_response(
        message=f"{normalize_email(email)} checked successfully.",
        data=EmailCheckResponse(exists=exists).model_dump(),
    )
