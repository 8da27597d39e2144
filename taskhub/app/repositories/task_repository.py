from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from taskhub.domain.entities import Task, TaskPriority, TaskStatus


@dataclass
class TaskFilter:
    """Optional list filters; None disables a filter"""

    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    project_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    search: Optional[str] = None


# A task together with the name of its project (None when detached)
TaskRow = Tuple[Task, Optional[str]]


class ITaskRepository(ABC):
    """
    Task repository interface - application layer

    Every method is scoped by owner_id; rows of other owners are invisible.
    """

    @abstractmethod
    async def list_by_owner(self, owner_id: int, task_filter: TaskFilter) -> List[TaskRow]:
        """Get the owner's tasks matching the filter, newest first"""
        pass

    @abstractmethod
    async def count_by_owner(self, owner_id: int, task_filter: TaskFilter) -> int:
        """Count the owner's tasks matching the filter"""
        pass

    @abstractmethod
    async def get_owned(self, task_id: int, owner_id: int) -> Optional[TaskRow]:
        """Get task by ID if it belongs to owner_id"""
        pass

    @abstractmethod
    async def create(self, task: Task) -> Task:
        """Create a new task"""
        pass

    @abstractmethod
    async def update_owned(self, task_id: int, owner_id: int, values: dict) -> bool:
        """
        Conditional update by id and owner. Returns False if no row matched.

        A status in values also maintains completed_at within the same statement.
        """
        pass

    @abstractmethod
    async def delete_owned(self, task_id: int, owner_id: int) -> bool:
        """Conditional delete by id and owner. Returns False if no row matched."""
        pass

    @abstractmethod
    async def detach_project(self, project_id: int, owner_id: int) -> int:
        """Clear project_id on the owner's tasks in a project. Returns count."""
        pass

    @abstractmethod
    async def delete_by_owner(self, owner_id: int) -> int:
        """Delete every task of an owner. Returns count deleted."""
        pass
