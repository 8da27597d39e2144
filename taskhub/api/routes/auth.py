from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import AliasChoices, BaseModel, EmailStr, Field

from taskhub.api.error import ClientError, ServerError
from taskhub.app.services.unit_of_work import UnitOfWork
from taskhub.app.use_cases.auth import (
    AuthResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    RegisterCommand,
    RegisterUseCase,
)
from taskhub.depends import get_bearer_token, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    username: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("username", "handle"),
        description="Unique username",
    )
    email: EmailStr = Field(
        ...,
        validation_alias=AliasChoices("email", "contact"),
        description="Unique email address",
    )
    password: str = Field(
        ...,
        min_length=6,
        validation_alias=AliasChoices("password", "secret"),
        description="Password (min 6 chars)",
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def register(request: RegisterRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    User Registration

    Creates an account and returns a 7-day session token.

    Raises:
        - 400 Bad Request: Missing field or password shorter than 6 characters
        - 409 Conflict: Username or email already exists
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        username=request.username, email=request.email, password=request.password
    )

    use_case = RegisterUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("USERNAME_ALREADY_EXISTS", "EMAIL_ALREADY_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    username accepts either the username or the email address.
    """

    username: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("username", "handle_or_contact", "email"),
        description="Username or email",
    )
    password: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("password", "secret"),
        description="Password",
    )


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(request: LoginRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    User Login

    Returns a fresh session token. Earlier tokens remain valid.

    Raises:
        - 400 Bad Request: Missing field
        - 401 Unauthorized: Invalid credentials (same message for unknown user
          and wrong password)
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.username, request.password)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    token: Optional[str] = Depends(get_bearer_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    User Logout

    Revokes the bearer token, if any, until it expires. Always returns 200.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        raise ServerError(result.error)

    return result.value
