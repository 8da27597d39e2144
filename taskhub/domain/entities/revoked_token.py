"""
RevokedToken Entity

Persistent revocation list for session tokens.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from taskhub.domain.base import utcnow


class RevokedToken(SQLModel, table=True):
    """
    RevokedToken entity - a session token invalidated before its expiry.

    Business Rules:
    - Keyed by SHA-256 of the token string; raw tokens are never stored
    - expires_at mirrors the token's own exp claim
    - Rows past expires_at no longer count and are purged on logout
    """

    __tablename__ = "revoked_tokens"

    token_hash: str = Field(primary_key=True, max_length=64)
    user_id: Optional[int] = Field(default=None, index=True)

    revoked_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_revoked_token_expires_at", "expires_at"),)
