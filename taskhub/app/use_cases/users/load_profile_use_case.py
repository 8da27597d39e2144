"""
Load Profile Use Case

Loads the account behind the current session token.
"""

from datetime import datetime

from pydantic import BaseModel

from libs.result import Error, Result, Return
from taskhub.app.services.unit_of_work import UnitOfWork


class ProfileResponse(BaseModel):
    """GET /me response payload"""

    id: int
    username: str
    email: str
    created_at: datetime


class LoadProfileUseCase:
    """
    Use case for loading the current user's public profile.

    Business Rules:
    - Token identity provides the user id
    - A valid token for an account that no longer exists -> USER_NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: int) -> Result[ProfileResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(
                ProfileResponse(
                    id=user.id,
                    username=user.username,
                    email=user.email,
                    created_at=user.created_at,
                )
            )
