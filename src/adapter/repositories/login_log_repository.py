from typing import List
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.login_log_repository import ILoginLogRepository
from src.domain.entities import LoginLog


class LoginLogRepository(ILoginLogRepository):
    """LoginLog repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, login_log: LoginLog) -> LoginLog:
        """Create a new login log (immutable)"""
        self.session.add(login_log)
        await self.session.flush()
        await self.session.refresh(login_log)
        return login_log

    async def get_by_account_id(self, account_id: UUID) -> List[LoginLog]:
        """Get login logs of an account, newest first"""
        stmt = (
            select(LoginLog)
            .where(LoginLog.account_id == account_id)
            .order_by(LoginLog.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())
