"""
Task Use Cases
"""

from .manage_tasks_use_case import ManageTasksUseCase
from .dtos import TaskCommand, TaskCountResponse, TaskResponse

__all__ = [
    "ManageTasksUseCase",
    "TaskCommand",
    "TaskCountResponse",
    "TaskResponse",
]
