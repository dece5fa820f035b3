from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.domain.entities import LoginLog


class ILoginLogRepository(ABC):
    """LoginLog repository interface - application layer"""

    @abstractmethod
    async def create(self, login_log: LoginLog) -> LoginLog:
        """Create a new login log (immutable)"""
        pass

    @abstractmethod
    async def get_by_account_id(self, account_id: UUID) -> List[LoginLog]:
        """Get login logs of an account, newest first"""
        pass
