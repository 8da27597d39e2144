"""
TaskHub Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class ProjectStatus(str, Enum):
    """Project lifecycle status"""

    active = "active"
    completed = "completed"
    archived = "archived"


class TaskStatus(str, Enum):
    """Task progress status"""

    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class TaskPriority(str, Enum):
    """Task priority"""

    low = "low"
    medium = "medium"
    high = "high"
