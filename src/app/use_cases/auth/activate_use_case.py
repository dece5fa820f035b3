"""
Activate Use Case

Moves an account into the activated state that login requires.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import Error, ErrorKind
from src.domain.result import Result, Return
from .dtos import ActivateResponse

logger = logging.getLogger(__name__)


class ActivateUseCase:
    """
    Use case for account activation.

    Business Rules:
    - Account must exist
    - Sets activated = True
    - Already activated accounts return success (idempotent)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[ActivateResponse]:
        """
        Execute activation use case.

        Args:
            account_id: Account to activate

        Returns:
            Result with activation status, or Error(NOT_FOUND)
        """
        async with self.uow:
            try:
                account = await self.uow.accounts.get_by_id(account_id)
                if account is None:
                    return Return.err(Error(ErrorKind.not_found, "Account not found"))

                account.activated = True
                await self.uow.accounts.update(account)
                await self.uow.commit()
            except SQLAlchemyError:
                logger.exception(f"Failed to activate account {account_id}")
                return Return.err(Error(ErrorKind.internal, "Failed to activate account"))

            return Return.ok(
                ActivateResponse(status="activated", message="Account is activated")
            )
