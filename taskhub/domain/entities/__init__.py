"""
TaskHub Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import ProjectStatus, TaskPriority, TaskStatus

# Export all entities
from .user import User
from .project import Project
from .task import Task
from .revoked_token import RevokedToken

__all__ = [
    # Enums
    "ProjectStatus",
    "TaskStatus",
    "TaskPriority",
    # Entities
    "User",
    "Project",
    "Task",
    "RevokedToken",
]
