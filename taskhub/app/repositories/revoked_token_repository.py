from abc import ABC, abstractmethod
from datetime import datetime

from taskhub.domain.entities import RevokedToken


class IRevokedTokenRepository(ABC):
    """Revoked token repository interface - application layer"""

    @abstractmethod
    async def is_revoked(self, token_hash: str, now: datetime) -> bool:
        """True if token_hash has an entry that has not yet expired"""
        pass

    @abstractmethod
    async def add(self, revoked_token: RevokedToken) -> bool:
        """Record a revocation. Returns False if the token was already recorded."""
        pass

    @abstractmethod
    async def purge_expired(self, now: datetime) -> int:
        """Delete entries past expires_at, when the token no longer verifies. Returns count deleted."""
        pass
