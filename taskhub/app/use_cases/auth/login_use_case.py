"""
Login Use Case

Handles user authentication and returns a session token.
"""

import logging

from libs.result import Error, Result, Return
from taskhub.api.utils.jwt import generate_jwt
from taskhub.app.services.unit_of_work import UnitOfWork
from .credentials import burn_password_check, verify_password
from .dtos import AuthResponse, UserInfo

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid username or password")


class LoginUseCase:
    """
    Use case for user login and session token issuance.

    Business Rules:
    - Identifier matches either username or email
    - Unknown user and wrong password return the identical error
    - A bcrypt comparison runs even when no user matches
    - Earlier tokens stay valid; concurrent sessions are allowed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identifier: str, password: str) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            identifier: Username or email
            password: Plain text password

        Returns:
            Result with AuthResponse containing the token, or Error
        """
        if not identifier or not password:
            return Return.err(
                Error("VALIDATION_ERROR", "Username and password are required")
            )

        async with self.uow:
            user = await self.uow.users.get_by_username_or_email(identifier)

            if user is None:
                await burn_password_check(password)
                return Return.err(INVALID_CREDENTIALS)

            if not await verify_password(password, user.password_hash):
                return Return.err(INVALID_CREDENTIALS)

            user_info = UserInfo(id=user.id, username=user.username, email=user.email)

        logger.info("User logged in: id=%s", user_info.id)

        token = generate_jwt(user_info.id, user_info.username)
        return Return.ok(
            AuthResponse(message="Login successful", token=token, user=user_info)
        )
