from typing import Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.base import utcnow
from src.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session ledger implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def find_valid(self, token: str) -> Optional[Session]:
        """
        Find a valid session by token.

        Revocation and expiry are both evaluated by the query itself, so a
        revoked or expired session is indistinguishable from a missing one.
        """
        stmt = select(Session).where(
            Session.token == token,
            Session.revoked == False,
            Session.expires_at > utcnow(),
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def revoke(self, token: str) -> bool:
        """Revoke the session holding token"""
        stmt = (
            update(Session)
            .where(Session.token == token, Session.revoked == False)
            .values(revoked=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def revoke_all_for_account(self, account_id: UUID) -> int:
        """Revoke all active sessions of an account"""
        stmt = (
            update(Session)
            .where(Session.account_id == account_id, Session.revoked == False)
            .values(revoked=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
