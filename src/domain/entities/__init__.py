"""
Identity Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import AccountRole, LoginLogType

# Export all entities
from .account import Account
from .credential import Credential
from .session import Session
from .login_log import LoginLog

__all__ = [
    # Enums
    "AccountRole",
    "LoginLogType",
    # Entities
    "Account",
    "Credential",
    "Session",
    "LoginLog",
]
