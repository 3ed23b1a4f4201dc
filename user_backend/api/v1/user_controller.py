# Standard library imports
from typing import Any, Dict, Optional

# External package imports
from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse

# Local application imports
from ...application.use_cases.user.register_user import RegisterUserUseCase
from ...application.use_cases.user.list_users import ListUsersUseCase
from ...application.use_cases.user.update_user import UpdateUserUseCase
from ...application.use_cases.user.delete_user import DeleteUserUseCase
from ...di.container import get_container
from .responses import success_response


router = APIRouter(tags=["users"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_user(body: Optional[Dict[str, Any]] = Body(default=None)) -> JSONResponse:
    """
    Register a new user

    Args:
        body: {name, age, email, password}; any other key is rejected

    Returns:
        201 success envelope with {_id, name, email, age}
    """
    container = get_container()
    register_use_case = container.get(RegisterUserUseCase)

    user = await register_use_case.execute(body or {})
    return success_response(
        message="SUCCESSFULLY REGISTERED!",
        data=user.to_wire(),
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/checkUsers")
async def check_users() -> JSONResponse:
    """
    List all users (passwords are never included)

    Returns:
        200 success envelope with the list of users
    """
    container = get_container()
    list_users_use_case = container.get(ListUsersUseCase)

    users = await list_users_use_case.execute()
    return success_response(
        message="USERS FOUND!" if users else "NO USERS FOUND!",
        data=[user.to_wire() for user in users],
        meta={"count": len(users)},
    )


@router.put("/updateUser/{user_id}")
async def update_user(
    user_id: str,
    body: Optional[Dict[str, Any]] = Body(default=None),
) -> JSONResponse:
    """
    Update any subset of a user's name, age, email and password

    Args:
        user_id: ID of the user
        body: Partial {name?, age?, email?, password?}

    Returns:
        200 success envelope with a message only
    """
    container = get_container()
    update_use_case = container.get(UpdateUserUseCase)

    await update_use_case.execute(user_id, body or {})
    return success_response(message="USER SUCCESSFULLY UPDATED!")


@router.delete("/deleteUser/{user_id}")
async def delete_user(user_id: str) -> JSONResponse:
    """
    Delete a user by ID

    Args:
        user_id: ID of the user

    Returns:
        200 success envelope with a confirmation message
    """
    container = get_container()
    delete_use_case = container.get(DeleteUserUseCase)

    await delete_use_case.execute(user_id)
    return success_response(message="USER SUCCESSFULLY DELETED!")
