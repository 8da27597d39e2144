"""
Password and token hashing helpers.

bcrypt is CPU-bound, so hashing and comparison run in a worker thread.
"""

import asyncio
import hashlib
from typing import Optional

import bcrypt

from libs.result import Error

# Fixed work factor; changing it only affects newly stored hashes
BCRYPT_ROUNDS = 10
MIN_PASSWORD_LENGTH = 6

# Compared against when no account matches, so unknown users cost the same
_DUMMY_PASSWORD_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(BCRYPT_ROUNDS))


async def hash_password(password: str) -> str:
    password_hash = await asyncio.to_thread(
        bcrypt.hashpw, password.encode("utf-8"), bcrypt.gensalt(BCRYPT_ROUNDS)
    )
    return password_hash.decode("utf-8")


async def verify_password(password: str, password_hash: str) -> bool:
    try:
        return await asyncio.to_thread(
            bcrypt.checkpw, password.encode("utf-8"), password_hash.encode("utf-8")
        )
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


async def burn_password_check(password: str) -> None:
    await asyncio.to_thread(bcrypt.checkpw, password.encode("utf-8"), _DUMMY_PASSWORD_HASH)


def password_error(password: str) -> Optional[Error]:
    """VALIDATION_ERROR for a password that is too short, else None"""
    if len(password) < MIN_PASSWORD_LENGTH:
        return Error(
            "VALIDATION_ERROR",
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )
    return None


def hash_token(token: str) -> str:
    """SHA-256 hex digest used as the revocation key"""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
