"""
User Use Case DTOs
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UpdateUserCommand(BaseModel):
    """Profile update; password is changed only when given"""

    username: str
    email: str
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Public account view - never includes the password hash"""

    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime
