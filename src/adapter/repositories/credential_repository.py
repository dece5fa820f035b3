from typing import Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.credential_repository import ICredentialRepository
from src.domain.base import utcnow
from src.domain.entities import Credential


class CredentialRepository(ICredentialRepository):
    """Credential repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, credential: Credential) -> Credential:
        """Create a new credential"""
        self.session.add(credential)
        await self.session.flush()
        await self.session.refresh(credential)
        return credential

    async def find_active_by_account_id(self, account_id: UUID) -> Optional[Credential]:
        """Get the active credential of an account"""
        stmt = (
            select(Credential)
            .where(Credential.account_id == account_id, Credential.active == True)
            .order_by(Credential.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def deactivate_all_for_account(self, account_id: UUID) -> int:
        """Deactivate every active credential of an account"""
        stmt = (
            update(Credential)
            .where(Credential.account_id == account_id, Credential.active == True)
            .values(active=False, updated_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
