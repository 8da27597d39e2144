from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.app.repositories.revoked_token_repository import IRevokedTokenRepository
from taskhub.domain.entities import RevokedToken


class RevokedTokenRepository(IRevokedTokenRepository):
    """Revoked token repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def is_revoked(self, token_hash: str, now: datetime) -> bool:
        stmt = select(RevokedToken.token_hash).where(
            RevokedToken.token_hash == token_hash,
            RevokedToken.expires_at > now,
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def add(self, revoked_token: RevokedToken) -> bool:
        existing = await self.session.get(RevokedToken, revoked_token.token_hash)
        if existing is not None:
            return False

        self.session.add(revoked_token)
        try:
            await self.session.flush()
        except IntegrityError:
            # Lost a race with a concurrent logout of the same token
            await self.session.rollback()
            return False
        return True

    async def purge_expired(self, now: datetime) -> int:
        stmt = delete(RevokedToken).where(RevokedToken.expires_at <= now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
