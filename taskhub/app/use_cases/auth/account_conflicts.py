"""
Uniqueness checks shared by registration and account updates.
"""

from typing import Optional

from libs.result import Error
from taskhub.app.repositories.user_repository import IUserRepository

USERNAME_TAKEN = Error("USERNAME_ALREADY_EXISTS", "Username already exists")
EMAIL_TAKEN = Error("EMAIL_ALREADY_EXISTS", "Email already registered")


async def find_account_conflict(
    users: IUserRepository, username: str, email: str, exclude_id: Optional[int] = None
) -> Optional[Error]:
    """
    Error for the first of username or email held by another account

    Args:
        users: User repository of the current unit of work
        username: Requested username
        email: Requested email (matched case-insensitively)
        exclude_id: Account allowed to keep its own username and email

    Returns:
        USERNAME_TAKEN, EMAIL_TAKEN, or None when both are free
    """
    holder = await users.get_by_username(username)
    if holder is not None and holder.id != exclude_id:
        return USERNAME_TAKEN
    holder = await users.get_by_email(email)
    if holder is not None and holder.id != exclude_id:
        return EMAIL_TAKEN
    return None
