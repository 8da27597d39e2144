"""
Manage Users Use Case

Account directory and self-service account maintenance.
"""

import logging
from typing import List, Optional

from libs.result import Error, Result, Return
from taskhub.app.repositories.user_repository import UserAlreadyExistsError
from taskhub.app.services.unit_of_work import UnitOfWork
from taskhub.app.use_cases.auth.account_conflicts import USERNAME_TAKEN, find_account_conflict
from taskhub.app.use_cases.auth.credentials import hash_password, password_error
from taskhub.app.use_cases.auth.dtos import RegisterCommand
from taskhub.app.use_cases.auth.logout_use_case import LogoutUseCase
from taskhub.app.use_cases.auth.register_use_case import create_account
from taskhub.app.use_cases.projects.dtos import MessageResponse
from taskhub.domain.base import utcnow
from taskhub.domain.entities import User
from .dtos import UpdateUserCommand, UserResponse

logger = logging.getLogger(__name__)

USER_NOT_FOUND = Error("USER_NOT_FOUND", "User not found")


def _to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class ManageUsersUseCase:
    """
    Use case for the user directory.

    Business Rules:
    - Any signed-in user can list and view public account views
    - Creating an account follows the registration rules but issues no token
    - Update, password reset and delete apply only to the caller's own
      account; any other id is reported as USER_NOT_FOUND
    - A new username or email must not belong to another account
    - Deleting an account deletes its projects and tasks and revokes the
      token used for the request
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list_users(self) -> Result[List[UserResponse]]:
        async with self.uow:
            users = await self.uow.users.list_all()
            return Return.ok([_to_response(u) for u in users])

    async def get_user(self, user_id: int) -> Result[UserResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)
            return Return.ok(_to_response(user))

    async def create_user(self, command: RegisterCommand) -> Result[UserResponse]:
        """
        Create an account on behalf of the caller.

        Returns:
            Result with the new account,
            or Error(VALIDATION_ERROR | USERNAME_ALREADY_EXISTS | EMAIL_ALREADY_EXISTS)
        """
        if not command.username or not command.email or not command.password:
            return Return.err(
                Error("VALIDATION_ERROR", "Username, email and password are required")
            )
        invalid_password = password_error(command.password)
        if invalid_password is not None:
            return Return.err(invalid_password)

        async with self.uow:
            user = await create_account(self.uow, command)
            if isinstance(user, Error):
                return Return.err(user)
            await self.uow.commit()
            response = _to_response(user)

        logger.info("User created: id=%s", response.id)
        return Return.ok(response)

    async def update_user(
        self, user_id: int, caller_id: int, command: UpdateUserCommand
    ) -> Result[UserResponse]:
        """
        Replace username and email of the caller's account, and the password if given.

        Returns:
            Result with the updated account, or Error(VALIDATION_ERROR |
            USER_NOT_FOUND | USERNAME_ALREADY_EXISTS | EMAIL_ALREADY_EXISTS)
        """
        if not command.username or not command.email:
            return Return.err(Error("VALIDATION_ERROR", "Username and email are required"))
        if command.password:
            invalid_password = password_error(command.password)
            if invalid_password is not None:
                return Return.err(invalid_password)

        if user_id != caller_id:
            return Return.err(USER_NOT_FOUND)

        async with self.uow:
            conflict = await find_account_conflict(
                self.uow.users, command.username, command.email, exclude_id=user_id
            )
            if conflict is not None:
                return Return.err(conflict)

            values = {
                "username": command.username,
                "email": command.email,
                "updated_at": utcnow(),
            }
            if command.password:
                values["password_hash"] = await hash_password(command.password)

            try:
                updated = await self.uow.users.update(user_id, values)
            except UserAlreadyExistsError:
                conflict = await find_account_conflict(
                    self.uow.users, command.username, command.email, exclude_id=user_id
                )
                return Return.err(conflict or USERNAME_TAKEN)
            if not updated:
                return Return.err(USER_NOT_FOUND)

            await self.uow.commit()

            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)
            response = _to_response(user)

        logger.info("User updated: id=%s", user_id)
        return Return.ok(response)

    async def reset_password(
        self, user_id: int, caller_id: int, password: str
    ) -> Result[MessageResponse]:
        if not password:
            return Return.err(Error("VALIDATION_ERROR", "Password is required"))
        invalid_password = password_error(password)
        if invalid_password is not None:
            return Return.err(invalid_password)

        if user_id != caller_id:
            return Return.err(USER_NOT_FOUND)

        async with self.uow:
            password_hash = await hash_password(password)
            updated = await self.uow.users.update(
                user_id, {"password_hash": password_hash, "updated_at": utcnow()}
            )
            if not updated:
                return Return.err(USER_NOT_FOUND)
            await self.uow.commit()

        logger.info("Password reset: id=%s", user_id)
        return Return.ok(MessageResponse(message="Password reset successfully"))

    async def delete_user(
        self, user_id: int, caller_id: int, token: Optional[str]
    ) -> Result[MessageResponse]:
        if user_id != caller_id:
            return Return.err(USER_NOT_FOUND)

        async with self.uow:
            await self.uow.tasks.delete_by_owner(user_id)
            await self.uow.projects.delete_by_owner(user_id)
            deleted = await self.uow.users.delete(user_id)
            if not deleted:
                return Return.err(USER_NOT_FOUND)
            await self.uow.commit()

        logger.info("User deleted: id=%s", user_id)

        # The account is gone; its session token must not keep working
        await LogoutUseCase(self.uow).execute(token)

        return Return.ok(MessageResponse(message="User deleted successfully"))
