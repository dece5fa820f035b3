from typing import Callable

from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.login_log_repository import LoginLogRepository
from src.app.services.audit_sink import AuditSink
from src.domain.entities import LoginLog


class SqlAlchemyAuditSink(AuditSink):
    """
    Writes login logs in a session of their own.

    Keeping audit writes out of the caller's unit of work means a failed
    insert cannot roll back or poison the business transaction.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

    async def record(self, entry: LoginLog) -> None:
        async with self.session_factory() as session:
            await LoginLogRepository(session).create(entry)
            await session.commit()
