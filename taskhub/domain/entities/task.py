"""
Task Entity
"""

from datetime import date, datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from taskhub.domain.base import utcnow
from .enums import TaskPriority, TaskStatus


class Task(SQLModel, table=True):
    """
    Task entity - owned by exactly one user, optionally inside a project.

    Business Rules:
    - Visible and mutable only by the owning user (user_id)
    - project_id, when set, references a project of the same owner
    - completed_at is set on completion and cleared when reopened
    """

    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    description: str = Field(default="")
    status: TaskStatus = Field(default=TaskStatus.pending)
    priority: TaskPriority = Field(default=TaskPriority.medium)

    project_id: Optional[int] = Field(default=None, foreign_key="projects.id", index=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)

    due_date: Optional[date] = None

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_task_user_created", "user_id", "created_at"),
        Index("idx_task_user_status", "user_id", "status"),
    )
