from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.audit_sink import SqlAlchemyAuditSink
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import to_http_error
from src.api.gate.context import InboundCall, RequestContext
from src.api.gate.pipeline import build_pipeline
from src.app.services.audit_sink import AuditSink
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_issuer import TokenIssuer, TokenSettings

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_audit_sink() -> AuditSink:
    return SqlAlchemyAuditSink(AsyncSessionLocal)


def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(TokenSettings.from_config(ApplicationConfig))


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)


def require_operation(operation: str):
    """
    Dependency factory running the gate pipeline for one named operation.

    Args:
        operation: Operation name, looked up in the public allowlist and in
            the role policy

    Returns:
        Dependency yielding the RequestContext for the call

    Raises:
        ClientError: 401 if the token is missing or invalid, 403 if the
            role is not admitted
    """

    async def dependency(
        request: Request,
        token_issuer: TokenIssuer = Depends(get_token_issuer),
    ) -> RequestContext:
        call = InboundCall(
            operation=operation,
            headers=dict(request.headers),
            cookies=dict(request.cookies),
        )
        pipeline = build_pipeline(ApplicationConfig, token_issuer)
        result = pipeline.run(RequestContext(operation=operation), call)

        if result.is_err():
            raise to_http_error(result.error)

        context, _ = result.value
        return context

    return dependency
