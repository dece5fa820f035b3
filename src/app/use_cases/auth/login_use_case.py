"""
Login Use Case

Handles credential verification and issues an access/refresh token pair.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.audit_sink import AuditSink
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import LoginLog, LoginLogType
from src.domain.errors import Error, ErrorKind
from src.domain.result import Result, Return
from .dtos import ClientInfo, LoginResult

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error(ErrorKind.invalid_credentials, "Invalid username or password")


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Unknown username and wrong password fail with the same error
    - Account must be both active and activated
    - Password checked against the account's active credential only
    - Creates a new refresh session; concurrent sessions are allowed
    - Audit records are best-effort and never fail the login
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_issuer: TokenIssuer,
        password_hasher: PasswordHasher,
        audit_sink: AuditSink,
    ):
        self.uow = uow
        self.token_issuer = token_issuer
        self.password_hasher = password_hasher
        self.audit_sink = audit_sink

    async def execute(
        self, username: str, password: str, client: Optional[ClientInfo] = None
    ) -> Result[LoginResult]:
        """
        Execute login use case.

        Args:
            username: Account username
            password: Plain text password
            client: Optional caller metadata for the audit trail

        Returns:
            Result with LoginResult containing the account and both tokens,
            or Error
        """
        client = client or ClientInfo()

        async with self.uow:
            try:
                account = await self.uow.accounts.get_by_username(username)
            except SQLAlchemyError:
                logger.exception("Account lookup failed during login")
                return Return.err(Error(ErrorKind.internal, "Failed to log in"))

            if account is None:
                # Keep the response time in line with a real password check
                self.password_hasher.dummy_verify(password)
                await self._write_login_log(
                    None, "Invalid username", LoginLogType.error, client
                )
                return Return.err(INVALID_CREDENTIALS)

            if not account.active or not account.activated:
                self.password_hasher.dummy_verify(password)
                return Return.err(Error(ErrorKind.user_inactive, "Account is inactive"))

            try:
                credential = await self.uow.credentials.find_active_by_account_id(
                    account.id
                )
            except SQLAlchemyError:
                logger.exception(f"Credential lookup failed for account {account.id}")
                return Return.err(INVALID_CREDENTIALS)

            if credential is None:
                return Return.err(INVALID_CREDENTIALS)

            if not self.password_hasher.verify(credential.password_hash, password):
                return Return.err(INVALID_CREDENTIALS)

            try:
                tokens = await self.token_issuer.issue_tokens(account, self.uow.sessions)
                await self.uow.commit()
            except SQLAlchemyError:
                logger.exception(f"Failed to record session for account {account.id}")
                return Return.err(Error(ErrorKind.internal, "Failed to log in"))

            await self._write_login_log(
                account.id, "Login successful", LoginLogType.success, client
            )

            return Return.ok(
                LoginResult(
                    account=account,
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                )
            )

    async def _write_login_log(
        self,
        account_id: Optional[UUID],
        message: str,
        log_type: LoginLogType,
        client: ClientInfo,
    ) -> None:
        try:
            await self.audit_sink.record(
                LoginLog(
                    account_id=account_id,
                    message=message,
                    log_type=log_type,
                    ip_address=client.ip_address,
                    user_agent=client.user_agent,
                )
            )
        except Exception:
            # Audit is fire-and-forget
            logger.warning(f"Failed to write login log: {message}", exc_info=True)
