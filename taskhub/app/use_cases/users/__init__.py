"""
User Use Cases
"""

from .load_profile_use_case import LoadProfileUseCase, ProfileResponse
from .manage_users_use_case import ManageUsersUseCase
from .dtos import UpdateUserCommand, UserResponse

__all__ = [
    "LoadProfileUseCase",
    "ManageUsersUseCase",
    "ProfileResponse",
    "UpdateUserCommand",
    "UserResponse",
]
