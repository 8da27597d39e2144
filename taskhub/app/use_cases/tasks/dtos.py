"""
Task Use Case DTOs
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from taskhub.domain.entities import TaskPriority, TaskStatus


class TaskCommand(BaseModel):
    """Editable task fields for create and update; ownership is never part of it"""

    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.pending
    priority: TaskPriority = TaskPriority.medium
    project_id: Optional[int] = None
    due_date: Optional[date] = None


class TaskResponse(BaseModel):
    id: int
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    project_id: Optional[int]
    project_name: Optional[str]
    user_id: int
    due_date: Optional[date]
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime]


class TaskCountResponse(BaseModel):
    count: int
