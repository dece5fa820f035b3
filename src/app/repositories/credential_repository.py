from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Credential


class ICredentialRepository(ABC):
    """Credential repository interface - application layer"""

    @abstractmethod
    async def create(self, credential: Credential) -> Credential:
        """Create a new credential"""
        pass

    @abstractmethod
    async def find_active_by_account_id(self, account_id: UUID) -> Optional[Credential]:
        """Get the active credential of an account"""
        pass

    @abstractmethod
    async def deactivate_all_for_account(self, account_id: UUID) -> int:
        """Deactivate every active credential of an account. Returns count."""
        pass
