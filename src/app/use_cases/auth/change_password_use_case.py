"""
Change Password Use Case

Rotates an account's credential.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Credential
from src.domain.errors import Error, ErrorKind
from src.domain.result import Result, Return
from .dtos import ChangePasswordResponse

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for password rotation.

    Business Rules:
    - Current password must verify against the active credential
    - Every prior credential is deactivated before the new one is created,
      so at most one credential is active at any time
    - Deactivation and creation commit together
    - Existing sessions are left untouched
    """

    def __init__(self, uow: UnitOfWork, password_hasher: PasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    async def execute(
        self, account_id: UUID, current_password: str, new_password: str
    ) -> Result[ChangePasswordResponse]:
        """
        Execute change password use case.

        Args:
            account_id: Account taken from the authenticated request context
            current_password: Password the caller claims is current
            new_password: Replacement password

        Returns:
            Result with status, or Error(NOT_FOUND / INVALID_CREDENTIALS)
        """
        async with self.uow:
            try:
                account = await self.uow.accounts.get_by_id(account_id)
                if account is None:
                    return Return.err(Error(ErrorKind.not_found, "Account not found"))

                credential = await self.uow.credentials.find_active_by_account_id(
                    account.id
                )
                if credential is None or not self.password_hasher.verify(
                    credential.password_hash, current_password
                ):
                    return Return.err(
                        Error(ErrorKind.invalid_credentials, "Current password is incorrect")
                    )

                await self.uow.credentials.deactivate_all_for_account(account.id)
                await self.uow.credentials.create(
                    Credential(
                        account_id=account.id,
                        password_hash=self.password_hasher.hash(new_password),
                        active=True,
                    )
                )
                await self.uow.commit()
            except SQLAlchemyError:
                logger.exception(f"Failed to change password for account {account_id}")
                await self.uow.rollback()
                return Return.err(Error(ErrorKind.internal, "Failed to change password"))

            return Return.ok(
                ChangePasswordResponse(status="changed", message="Password updated")
            )
