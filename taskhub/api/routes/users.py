from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import AliasChoices, BaseModel, EmailStr, Field

from taskhub.api.error import ClientError, ServerError
from taskhub.api.routes.auth import RegisterRequest
from taskhub.app.services.unit_of_work import UnitOfWork
from taskhub.app.use_cases.auth import Identity, RegisterCommand
from taskhub.app.use_cases.projects import MessageResponse
from taskhub.app.use_cases.users import ManageUsersUseCase, UpdateUserCommand, UserResponse
from taskhub.depends import get_bearer_token, get_current_user, get_unit_of_work

router = APIRouter(prefix="/users", tags=["Users"])


class UpdateUserRequest(BaseModel):
    """Profile update payload; password is optional"""

    username: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("username", "handle"),
    )
    email: EmailStr = Field(..., validation_alias=AliasChoices("email", "contact"))
    password: Optional[str] = Field(
        None,
        min_length=6,
        validation_alias=AliasChoices("password", "secret"),
        description="New password (min 6 chars); omit to keep the current one",
    )


class ResetPasswordRequest(BaseModel):
    password: str = Field(
        ..., min_length=6, validation_alias=AliasChoices("password", "secret")
    )


def raise_for_error(error) -> None:
    if error.code == "VALIDATION_ERROR":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    elif error.code == "USER_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code in ("USERNAME_ALREADY_EXISTS", "EMAIL_ALREADY_EXISTS"):
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    raise ServerError(error)


@router.get("", status_code=status.HTTP_200_OK, response_model=List[UserResponse])
async def list_users(
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List all accounts (public views), newest first"""
    result = await ManageUsersUseCase(uow).list_users()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get User

    Raises:
        - 404 Not Found: No such account
    """
    result = await ManageUsersUseCase(uow).get_user(user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def create_user(
    request: RegisterRequest,
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create User

    Same rules as registration; no session token is issued.

    Raises:
        - 400 Bad Request: Missing field or password shorter than 6 characters
        - 409 Conflict: Username or email already exists
    """
    command = RegisterCommand(
        username=request.username, email=request.email, password=request.password
    )
    result = await ManageUsersUseCase(uow).create_user(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserResponse)
async def update_user(
    user_id: int,
    request: UpdateUserRequest,
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update User

    Only the caller's own account can be updated.

    Raises:
        - 400 Bad Request: Missing field or password shorter than 6 characters
        - 404 Not Found: Not the caller's account
        - 409 Conflict: Username or email belongs to another account
    """
    command = UpdateUserCommand(
        username=request.username, email=request.email, password=request.password
    )
    result = await ManageUsersUseCase(uow).update_user(user_id, current_user.id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{user_id}/reset-password", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
async def reset_password(
    user_id: int,
    request: ResetPasswordRequest,
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Reset Password

    Existing session tokens stay valid.

    Raises:
        - 400 Bad Request: Password shorter than 6 characters
        - 404 Not Found: Not the caller's account
    """
    result = await ManageUsersUseCase(uow).reset_password(
        user_id, current_user.id, request.password
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{user_id}", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def delete_user(
    user_id: int,
    current_user: Identity = Depends(get_current_user),
    token: Optional[str] = Depends(get_bearer_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete User

    Deletes the caller's account with its projects and tasks, and revokes
    the token used for this request.

    Raises:
        - 404 Not Found: Not the caller's account
    """
    result = await ManageUsersUseCase(uow).delete_user(user_id, current_user.id, token)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
