from datetime import timedelta

import pytest

from src.app.use_cases.auth import RefreshTokenUseCase
from src.domain.base import utcnow
from src.domain.entities import Account, AccountRole, Session
from src.domain.errors import ErrorKind


@pytest.fixture
def account():
    return Account(username="alice", role=AccountRole.admin, active=True, activated=True)


def _session_for(account, token):
    return Session(
        account_id=account.id, token=token, expires_at=utcnow() + timedelta(days=7)
    )


@pytest.mark.asyncio
async def test_refresh_issues_new_access_token(mock_uow, token_issuer, account):
    refresh_token, _ = token_issuer.create_refresh_token()
    mock_uow.sessions.find_valid.return_value = _session_for(account, refresh_token)
    mock_uow.accounts.get_by_id.return_value = account

    result = await RefreshTokenUseCase(mock_uow, token_issuer).execute(refresh_token)

    assert result.is_ok()
    assert result.value.account_id == str(account.id)
    claims = token_issuer.verify_access_token(result.value.access_token)
    assert claims.is_ok()
    assert claims.value.role == AccountRole.admin
    mock_uow.sessions.find_valid.assert_called_once_with(refresh_token)
    # The session is kept, not rotated
    mock_uow.sessions.revoke.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_rejects_access_token(mock_uow, token_issuer, account):
    access_token = token_issuer.create_access_token(account)

    result = await RefreshTokenUseCase(mock_uow, token_issuer).execute(access_token)

    assert result.is_err()
    assert result.error.kind == ErrorKind.unauthenticated
    mock_uow.sessions.find_valid.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_revoked_session(mock_uow, token_issuer):
    refresh_token, _ = token_issuer.create_refresh_token()
    mock_uow.sessions.find_valid.return_value = None

    result = await RefreshTokenUseCase(mock_uow, token_issuer).execute(refresh_token)

    assert result.is_err()
    assert result.error.kind == ErrorKind.unauthenticated


@pytest.mark.asyncio
async def test_refresh_missing_token(mock_uow, token_issuer):
    result = await RefreshTokenUseCase(mock_uow, token_issuer).execute("")

    assert result.is_err()
    assert result.error.kind == ErrorKind.unauthenticated


@pytest.mark.asyncio
async def test_refresh_for_disabled_account(mock_uow, token_issuer, account):
    refresh_token, _ = token_issuer.create_refresh_token()
    account.active = False
    mock_uow.sessions.find_valid.return_value = _session_for(account, refresh_token)
    mock_uow.accounts.get_by_id.return_value = account

    result = await RefreshTokenUseCase(mock_uow, token_issuer).execute(refresh_token)

    assert result.is_err()
    assert result.error.kind == ErrorKind.user_inactive
