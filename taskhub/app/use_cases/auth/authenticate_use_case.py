"""
Authenticate Use Case

The gate every protected route passes through.
"""

from typing import Optional

from libs.result import Error, Result, Return
from taskhub.api.utils.jwt import verify_jwt
from taskhub.app.services.unit_of_work import UnitOfWork
from taskhub.domain.base import utcnow
from .credentials import hash_token
from .dtos import Identity


class AuthenticateUseCase:
    """
    Use case for resolving a bearer token to the caller's Identity.

    Business Rules:
    - Missing token -> MISSING_TOKEN
    - Revoked token -> TOKEN_REVOKED, checked before the signature so a revoked
      token is rejected the same way whether or not it would still verify
    - Bad signature, expired or malformed claims -> INVALID_TOKEN
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: Optional[str]) -> Result[Identity]:
        if not token:
            return Return.err(Error("MISSING_TOKEN", "Access token is missing"))

        async with self.uow:
            revoked = await self.uow.revoked_tokens.is_revoked(hash_token(token), utcnow())

        if revoked:
            return Return.err(Error("TOKEN_REVOKED", "Access token has been revoked"))

        payload = verify_jwt(token)
        if payload is None:
            return Return.err(Error("INVALID_TOKEN", "Access token is invalid or expired"))

        user_id = payload.get("user_id")
        username = payload.get("username")
        if type(user_id) is not int or not isinstance(username, str):
            return Return.err(Error("INVALID_TOKEN", "Access token is invalid or expired"))

        return Return.ok(Identity(id=user_id, username=username))
