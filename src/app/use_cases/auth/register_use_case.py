import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account, Credential
from src.domain.errors import Error, ErrorKind
from src.domain.result import Result, Return
from .dtos import RegisterCommand, RegisterResponse

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[RegisterResponse] (structured response)

    Business Logic:
    1. Reject a username that is already taken
    2. Hash password with bcrypt
    3. Create Account (active, not activated)
    4. Create its active Credential
    5. Commit both writes atomically; a failure of either leaves neither
    No session or token is issued by registration.
    """

    def __init__(self, uow: UnitOfWork, password_hasher: PasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with validated username, password, role

        Returns:
            Result[RegisterResponse] with the new account
            or Error(ALREADY_EXISTS) if the username is taken
        """
        async with self.uow:
            try:
                existing = await self.uow.accounts.get_by_username(command.username)
                if existing:
                    return Return.err(
                        Error(ErrorKind.already_exists, "Username already registered")
                    )

                password_hash = self.password_hasher.hash(command.password)

                account = Account(
                    username=command.username,
                    role=command.role,
                    active=True,
                    activated=False,
                )
                account = await self.uow.accounts.create(account)

                credential = Credential(
                    account_id=account.id,
                    password_hash=password_hash,
                    active=True,
                )
                await self.uow.credentials.create(credential)

                await self.uow.commit()
            except IntegrityError:
                # Lost a race on the unique username index
                await self.uow.rollback()
                return Return.err(
                    Error(ErrorKind.already_exists, "Username already registered")
                )
            except SQLAlchemyError:
                logger.exception("Registration failed, transaction rolled back")
                await self.uow.rollback()
                return Return.err(Error(ErrorKind.internal, "Failed to register account"))

            return Return.ok(
                RegisterResponse(
                    account_id=str(account.id),
                    username=account.username,
                    role=account.role,
                    activated=account.activated,
                )
            )
