"""
Logout Use Case

Revokes the refresh session behind a refresh token.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import Error, ErrorKind
from src.domain.result import Result, Return

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for single-session logout.

    Business Rules:
    - Empty or missing token is a successful no-op (idempotent logout)
    - Unknown or already revoked tokens are also a no-op
    - Session rows are revoked, never deleted
    - Already issued access tokens stay valid until they expire
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: Optional[str]) -> Result[None]:
        """
        Execute logout use case.

        Args:
            refresh_token: Refresh token to revoke, may be empty

        Returns:
            Result with no value, or Error(INTERNAL) if revocation failed
        """
        if not refresh_token:
            return Return.ok()

        async with self.uow:
            try:
                await self.uow.sessions.revoke(refresh_token)
                await self.uow.commit()
            except SQLAlchemyError:
                logger.exception("Failed to revoke refresh session")
                return Return.err(Error(ErrorKind.internal, "Failed to log out"))

            return Return.ok()
