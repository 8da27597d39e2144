"""
Logout Use Case

Revokes a session token for the rest of its lifetime.
"""

import logging
from typing import Optional

from libs.result import Result, Return
from taskhub.api.utils.jwt import EXPIRY_LEEWAY, TOKEN_LIFETIME, get_token_expiry, verify_jwt
from taskhub.app.services.unit_of_work import UnitOfWork
from taskhub.domain.base import utcnow
from taskhub.domain.entities import RevokedToken
from .credentials import hash_token
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)

LOGGED_OUT = LogoutResponse(message="Logout successful")


class LogoutUseCase:
    """
    Use case for logout.

    Business Rules:
    - Always succeeds, with or without a token
    - Revocation lasts until the token stops verifying (its exp plus the
      verifier's one-second leeway), never longer than the token lifetime
      plus that leeway
    - Already expired tokens are not recorded
    - Logging out twice is a no-op
    - Expired revocation entries are purged on every logout
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: Optional[str]) -> Result[LogoutResponse]:
        if not token:
            return Return.ok(LOGGED_OUT)

        now = utcnow()
        latest_expiry = now + TOKEN_LIFETIME
        token_expiry = get_token_expiry(token)
        if token_expiry is None or token_expiry > latest_expiry:
            token_expiry = latest_expiry

        # Outlive the last moment the signature check still accepts the token
        expires_at = token_expiry + EXPIRY_LEEWAY
        if expires_at <= now:
            return Return.ok(LOGGED_OUT)

        payload = verify_jwt(token)
        user_id = payload.get("user_id") if payload else None

        async with self.uow:
            added = await self.uow.revoked_tokens.add(
                RevokedToken(
                    token_hash=hash_token(token),
                    user_id=user_id if isinstance(user_id, int) else None,
                    revoked_at=now,
                    expires_at=expires_at,
                )
            )
            purged = await self.uow.revoked_tokens.purge_expired(now)
            await self.uow.commit()

        if added:
            logger.info("User logged out: id=%s", user_id)
        if purged:
            logger.debug("Purged %d expired revoked tokens", purged)

        return Return.ok(LOGGED_OUT)
