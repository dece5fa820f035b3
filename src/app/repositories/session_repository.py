from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Session


class ISessionRepository(ABC):
    """
    Session ledger interface - application layer

    Tracks refresh-session validity. Rows only ever move from valid to
    revoked, so no cross-session locking is needed.
    """

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def find_valid(self, token: str) -> Optional[Session]:
        """Find a session by token that is neither revoked nor expired"""
        pass

    @abstractmethod
    async def revoke(self, token: str) -> bool:
        """Revoke the session holding token. Returns True if a row changed."""
        pass

    @abstractmethod
    async def revoke_all_for_account(self, account_id: UUID) -> int:
        """Revoke all active sessions of an account. Returns count."""
        pass
