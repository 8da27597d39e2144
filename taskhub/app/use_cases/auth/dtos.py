"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    """

    username: str
    email: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class Identity(BaseModel):
    """Authenticated caller attached to a request by the auth gate"""

    id: int
    username: str


class UserInfo(BaseModel):
    """Public account view - never includes the password hash"""

    id: int
    username: str
    email: str


class AuthResponse(BaseModel):
    """Response for register and login use cases"""

    message: str
    token: str
    user: UserInfo


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    message: str
