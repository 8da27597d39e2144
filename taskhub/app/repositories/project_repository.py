from abc import ABC, abstractmethod
from typing import List, Optional

from taskhub.domain.entities import Project


class IProjectRepository(ABC):
    """
    Project repository interface - application layer

    Every method is scoped by owner_id; rows of other owners are invisible.
    """

    @abstractmethod
    async def list_by_owner(self, owner_id: int) -> List[Project]:
        """Get all projects of an owner, newest first"""
        pass

    @abstractmethod
    async def get_owned(self, project_id: int, owner_id: int) -> Optional[Project]:
        """Get project by ID if it belongs to owner_id"""
        pass

    @abstractmethod
    async def create(self, project: Project) -> Project:
        """Create a new project"""
        pass

    @abstractmethod
    async def update_owned(self, project_id: int, owner_id: int, values: dict) -> bool:
        """Conditional update by id and owner. Returns False if no row matched."""
        pass

    @abstractmethod
    async def delete_owned(self, project_id: int, owner_id: int) -> bool:
        """Conditional delete by id and owner. Returns False if no row matched."""
        pass

    @abstractmethod
    async def delete_by_owner(self, owner_id: int) -> int:
        """Delete every project of an owner. Returns count deleted."""
        pass
