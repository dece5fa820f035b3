"""
Identity Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AccountRole(str, Enum):
    """Account role, read by the authorization gate"""

    user = "user"
    admin = "admin"
    super_admin = "super-admin"


class LoginLogType(str, Enum):
    """Severity of a login audit record"""

    info = "info"
    warn = "warn"
    error = "error"
    success = "success"
