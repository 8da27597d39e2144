"""
User Entity

Represents an account that owns projects and tasks.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from taskhub.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity - an account identified by username or email.

    Business Rules:
    - Username and email are each unique across all users
    - Password stored as bcrypt hash (cost factor 10)
    - Username, email and password change only through the owner's own
      profile update or password reset
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
