"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Account, AccountRole


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    """

    username: str
    password: str
    role: AccountRole


class ClientInfo(BaseModel):
    """Caller metadata attached to login audit records"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class RegisterResponse(BaseModel):
    """Response for registration use case"""

    account_id: str
    username: str
    role: AccountRole
    activated: bool


class ActivateResponse(BaseModel):
    """Response for activation use case"""

    status: str
    message: str


class LoginResult(BaseModel):
    """
    Result of a successful login

    Tokens never go into a response body; the API layer turns them into
    cookies.
    """

    account: Account
    access_token: str
    refresh_token: str


class RefreshTokenResult(BaseModel):
    """Result of a successful refresh"""

    account_id: str
    access_token: str


class ChangePasswordResponse(BaseModel):
    """Response for change password use case"""

    status: str
    message: str
