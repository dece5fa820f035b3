from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_issuer import TokenIssuer, TokenSettings


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories; create() hands back what it was given
    uow.accounts = MagicMock()
    uow.accounts.get_by_username = AsyncMock(return_value=None)
    uow.accounts.get_by_id = AsyncMock(return_value=None)
    uow.accounts.create = AsyncMock(side_effect=lambda account: account)
    uow.accounts.update = AsyncMock(side_effect=lambda account: account)

    uow.credentials = MagicMock()
    uow.credentials.create = AsyncMock(side_effect=lambda credential: credential)
    uow.credentials.find_active_by_account_id = AsyncMock(return_value=None)
    uow.credentials.deactivate_all_for_account = AsyncMock(return_value=1)

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.find_valid = AsyncMock(return_value=None)
    uow.sessions.revoke = AsyncMock(return_value=True)
    uow.sessions.revoke_all_for_account = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def token_settings():
    return TokenSettings(
        secret="unit-test-secret",
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(days=7),
        issuer="identity-service-test",
    )


@pytest.fixture
def token_issuer(token_settings):
    return TokenIssuer(token_settings)


@pytest.fixture
def password_hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def audit_sink():
    sink = MagicMock()
    sink.record = AsyncMock()
    return sink
