"""
Project Entity

Groups tasks; owned by a single user.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from taskhub.domain.base import utcnow
from .enums import ProjectStatus


class Project(SQLModel, table=True):
    """
    Project entity - owned by exactly one user.

    Business Rules:
    - Visible and mutable only by the owning user (user_id)
    - Deleting a project detaches the owner's tasks instead of deleting them
    """

    __tablename__ = "projects"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    description: str = Field(default="")
    status: ProjectStatus = Field(default=ProjectStatus.active)

    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_project_user_created", "user_id", "created_at"),)
