"""
Authentication Use Cases

All identity lifecycle business logic.
"""

from .register_use_case import RegisterUseCase
from .activate_use_case import ActivateUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .change_password_use_case import ChangePasswordUseCase
from .dtos import (
    RegisterCommand,
    ClientInfo,
    RegisterResponse,
    ActivateResponse,
    LoginResult,
    RefreshTokenResult,
    ChangePasswordResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "ActivateUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "RefreshTokenUseCase",
    "ChangePasswordUseCase",
    # DTOs - Commands
    "RegisterCommand",
    "ClientInfo",
    # DTOs - Responses
    "RegisterResponse",
    "ActivateResponse",
    "LoginResult",
    "RefreshTokenResult",
    "ChangePasswordResponse",
]
