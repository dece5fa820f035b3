"""
Refresh Token Use Case

Exchanges a valid refresh token for a new access token.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import Error, ErrorKind
from src.domain.result import Result, Return
from .dtos import RefreshTokenResult

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing access tokens.

    Business Rules:
    - Refresh token signature, issuer and expiry must verify
    - Session must be found valid by the ledger (not revoked, not expired)
    - Account must still exist, be active and be activated
    - The refresh session itself is kept; only a new access token is minted
    """

    def __init__(self, uow: UnitOfWork, token_issuer: TokenIssuer):
        self.uow = uow
        self.token_issuer = token_issuer

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResult]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token presented by the client

        Returns:
            Result with RefreshTokenResult containing a new access token, or Error
        """
        if not refresh_token:
            return Return.err(Error(ErrorKind.unauthenticated, "Missing refresh token"))

        verified = self.token_issuer.verify_refresh_token(refresh_token)
        if verified.is_err():
            return Return.err(
                Error(ErrorKind.unauthenticated, "Invalid or expired refresh token")
            )

        async with self.uow:
            try:
                session = await self.uow.sessions.find_valid(refresh_token)
                if session is None:
                    return Return.err(
                        Error(ErrorKind.unauthenticated, "Session is revoked or expired")
                    )

                account = await self.uow.accounts.get_by_id(session.account_id)
            except SQLAlchemyError:
                logger.exception("Session lookup failed during refresh")
                return Return.err(Error(ErrorKind.internal, "Failed to refresh token"))

            if account is None:
                return Return.err(Error(ErrorKind.unauthenticated, "Account not found"))

            if not account.active or not account.activated:
                return Return.err(Error(ErrorKind.user_inactive, "Account is inactive"))

            return Return.ok(
                RefreshTokenResult(
                    account_id=str(account.id),
                    access_token=self.token_issuer.create_access_token(account),
                )
            )
