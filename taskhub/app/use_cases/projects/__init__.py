"""
Project Use Cases
"""

from .manage_projects_use_case import ManageProjectsUseCase
from .dtos import MessageResponse, ProjectCommand, ProjectResponse

__all__ = [
    "ManageProjectsUseCase",
    "ProjectCommand",
    "ProjectResponse",
    "MessageResponse",
]
