from typing import List, Optional

from sqlalchemy import delete, func, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import col, or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.app.repositories.user_repository import IUserRepository, UserAlreadyExistsError
from taskhub.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id).execution_options(populate_existing=True)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        stmt = select(User).where(User.username == username)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address, ignoring case"""
        stmt = select(User).where(func.lower(User.email) == email.lower())
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_username_or_email(self, identifier: str) -> Optional[User]:
        # Emails match case-insensitively. A username may look like someone
        # else's email; prefer the username match
        stmt = (
            select(User)
            .where(or_(User.username == identifier, func.lower(User.email) == identifier.lower()))
            .order_by(User.username != identifier)
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise UserAlreadyExistsError(str(exc.orig)) from exc
        await self.session.refresh(user)
        return user

    async def list_all(self) -> List[User]:
        """Get all users, newest first"""
        stmt = (
            select(User)
            .order_by(col(User.created_at).desc(), col(User.id).desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def update(self, user_id: int, values: dict) -> bool:
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise UserAlreadyExistsError(str(exc.orig)) from exc
        return result.rowcount > 0

    async def delete(self, user_id: int) -> bool:
        stmt = delete(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
