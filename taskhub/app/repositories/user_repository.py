from abc import ABC, abstractmethod
from typing import List, Optional

from taskhub.domain.entities import User


class UserAlreadyExistsError(Exception):
    """Raised when a unique username/email constraint rejects an insert"""


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_username_or_email(self, identifier: str) -> Optional[User]:
        """Get user whose username or email equals identifier"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises UserAlreadyExistsError on a unique violation."""
        pass

    @abstractmethod
    async def list_all(self) -> List[User]:
        """Get all users, newest first"""
        pass

    @abstractmethod
    async def update(self, user_id: int, values: dict) -> bool:
        """
        Conditional update by id. Returns False if no row matched.
        Raises UserAlreadyExistsError on a unique violation.
        """
        pass

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        """Delete by id. Returns False if no row matched."""
        pass
