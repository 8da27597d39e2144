"""
Project Use Case DTOs
"""

from datetime import datetime

from pydantic import BaseModel

from taskhub.domain.entities import ProjectStatus


class ProjectCommand(BaseModel):
    """Editable project fields for create and update; ownership is never part of it"""

    name: str
    description: str = ""
    status: ProjectStatus = ProjectStatus.active


class ProjectResponse(BaseModel):
    id: int
    name: str
    description: str
    status: ProjectStatus
    user_id: int
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    message: str
