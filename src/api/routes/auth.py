import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import to_http_error
from src.api.gate.authentication import ACCESS_TOKEN_COOKIE
from src.api.gate.context import RequestContext
from src.app.services.audit_sink import AuditSink
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    ActivateResponse,
    ActivateUseCase,
    ChangePasswordResponse,
    ChangePasswordUseCase,
    ClientInfo,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
)
from src.depends import (
    get_audit_sink,
    get_password_hasher,
    get_token_issuer,
    get_unit_of_work,
    require_operation,
)
from src.domain.entities import AccountRole

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

REFRESH_TOKEN_COOKIE = "refresh_token"
ACCESS_TOKEN_PATH = "/"
# Covers both /auth/logout and /auth/refresh
REFRESH_TOKEN_PATH = "/auth"


def _set_token_cookie(response: Response, key: str, value: str, path: str, max_age: int):
    response.set_cookie(
        key=key,
        value=value,
        path=path,
        max_age=max_age,
        secure=ApplicationConfig.COOKIE_SECURE,
        httponly=True,
        samesite="strict",
    )


def _clear_token_cookie(response: Response, key: str, path: str):
    response.delete_cookie(
        key=key,
        path=path,
        secure=ApplicationConfig.COOKIE_SECURE,
        httponly=True,
        samesite="strict",
    )


def _client_info(request: Request) -> ClientInfo:
    return ClientInfo(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


class AccountIdResponse(BaseModel):
    """Response carrying only the account identifier"""

    account_id: str


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    username: str = Field(..., min_length=1, max_length=150, description="Unique username")
    password: str = Field(..., min_length=1, max_length=1024, description="Account password")
    role: AccountRole = Field(..., description="user, admin or super-admin")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=AccountIdResponse
)
async def register(
    request: RegisterRequest,
    _: RequestContext = Depends(require_operation("register")),
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    Account Registration

    Creates an unactivated account and its credential in one transaction.
    No tokens are issued.

    Raises:
        - 409 Conflict: Username already exists
        - 422 Unprocessable Entity: Invalid input or unknown role
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        username=request.username, password=request.password, role=request.role
    )

    use_case = RegisterUseCase(uow, password_hasher)
    result = await use_case.execute(command)

    if result.is_err():
        raise to_http_error(result.error)

    return AccountIdResponse(account_id=result.value.account_id)


class ActivateRequest(BaseModel):
    """Activate HTTP request payload"""

    account_id: UUID = Field(..., description="Account to activate")


@router.post("/activate", status_code=status.HTTP_200_OK, response_model=ActivateResponse)
async def activate(
    request: ActivateRequest,
    _: RequestContext = Depends(require_operation("activate")),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Account Activation

    Idempotent: activating an activated account succeeds. Public unless
    ACTIVATION_REQUIRES_AUTH is set, in which case OPERATION_ROLES decides
    who may call it.

    Raises:
        - 404 Not Found: Account does not exist
        - 500 Internal Server Error: Server error
    """
    use_case = ActivateUseCase(uow)
    result = await use_case.execute(request.account_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    username: str = Field(..., description="Account username")
    password: str = Field(..., description="Account password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AccountIdResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    response: Response,
    _: RequestContext = Depends(require_operation("login")),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    audit_sink: AuditSink = Depends(get_audit_sink),
):
    """
    Login

    Verifies credentials and delivers tokens as cookies:
    - access_token, Path=/
    - refresh_token, Path=/auth
    Both Secure, HttpOnly, SameSite=Strict.

    Raises:
        - 401 Unauthorized: Invalid credentials or inactive account
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, token_issuer, password_hasher, audit_sink)
    result = await use_case.execute(
        request.username, request.password, _client_info(http_request)
    )

    if result.is_err():
        raise to_http_error(result.error)

    login_result = result.value
    settings = token_issuer.settings
    _set_token_cookie(
        response,
        ACCESS_TOKEN_COOKIE,
        login_result.access_token,
        ACCESS_TOKEN_PATH,
        int(settings.access_ttl.total_seconds()),
    )
    _set_token_cookie(
        response,
        REFRESH_TOKEN_COOKIE,
        login_result.refresh_token,
        REFRESH_TOKEN_PATH,
        int(settings.refresh_ttl.total_seconds()),
    )

    return AccountIdResponse(account_id=str(login_result.account.id))


class RefreshTokenRequest(BaseModel):
    """Optional body for logout/refresh when the refresh cookie is unavailable"""

    refresh_token: Optional[str] = Field(default=None, description="Refresh token")


def _refresh_token_from(request: Request, body: Optional[RefreshTokenRequest]) -> str:
    if body is not None and body.refresh_token:
        return body.refresh_token
    return request.cookies.get(REFRESH_TOKEN_COOKIE, "")


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(
    http_request: Request,
    response: Response,
    body: Optional[RefreshTokenRequest] = None,
    _: RequestContext = Depends(require_operation("logout")),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Revokes the refresh session and clears both token cookies whatever the
    revocation outcome. A missing refresh token is not an error.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(_refresh_token_from(http_request, body))

    if result.is_err():
        logger.error(f"Logout revocation failed: {result.error.code}")

    _clear_token_cookie(response, ACCESS_TOKEN_COOKIE, ACCESS_TOKEN_PATH)
    _clear_token_cookie(response, REFRESH_TOKEN_COOKIE, REFRESH_TOKEN_PATH)

    return {"status": "logged_out"}


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=AccountIdResponse)
async def refresh(
    http_request: Request,
    response: Response,
    body: Optional[RefreshTokenRequest] = None,
    _: RequestContext = Depends(require_operation("refresh")),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
):
    """
    Refresh Access Token

    Exchanges a valid refresh session for a new access token cookie.

    Raises:
        - 401 Unauthorized: Missing, invalid, revoked or expired refresh token,
          or inactive account
        - 500 Internal Server Error: Server error
    """
    use_case = RefreshTokenUseCase(uow, token_issuer)
    result = await use_case.execute(_refresh_token_from(http_request, body))

    if result.is_err():
        raise to_http_error(result.error)

    _set_token_cookie(
        response,
        ACCESS_TOKEN_COOKIE,
        result.value.access_token,
        ACCESS_TOKEN_PATH,
        int(token_issuer.settings.access_ttl.total_seconds()),
    )

    return AccountIdResponse(account_id=result.value.account_id)


class MeResponse(BaseModel):
    """GET /auth/me response payload"""

    account_id: str
    username: str
    role: AccountRole


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def me(context: RequestContext = Depends(require_operation("me"))):
    """
    Current Identity

    Returns the identity the authentication gate attached to the request.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired access token
    """
    identity = context.identity
    return MeResponse(
        account_id=str(identity.account_id),
        username=identity.username,
        role=identity.role,
    )


class ChangePasswordRequest(BaseModel):
    """Change password HTTP request payload"""

    current_password: str = Field(..., description="Current password")
    new_password: str = Field(..., min_length=1, max_length=1024, description="New password")


@router.post(
    "/change-password", status_code=status.HTTP_200_OK, response_model=ChangePasswordResponse
)
async def change_password(
    request: ChangePasswordRequest,
    context: RequestContext = Depends(require_operation("change_password")),
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    Change Password

    Rotates the caller's credential. Sessions and access tokens already
    issued are not affected.

    Raises:
        - 401 Unauthorized: Not authenticated, or current password incorrect
        - 404 Not Found: Account no longer exists
        - 500 Internal Server Error: Server error
    """
    use_case = ChangePasswordUseCase(uow, password_hasher)
    result = await use_case.execute(
        context.identity.account_id, request.current_password, request.new_password
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
