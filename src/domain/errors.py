"""
Identity Service Error Taxonomy

Closed set of error kinds shared by every layer. The HTTP status for each
kind is decided once, in src/api/error.py.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure an operation can report"""

    already_exists = "ALREADY_EXISTS"
    not_found = "NOT_FOUND"
    invalid_credentials = "INVALID_CREDENTIALS"
    user_inactive = "USER_INACTIVE"
    unauthenticated = "UNAUTHENTICATED"
    token_invalid = "TOKEN_INVALID"
    permission_denied = "PERMISSION_DENIED"
    internal = "INTERNAL"


@dataclass(frozen=True)
class Error:
    kind: ErrorKind
    message: str

    @property
    def code(self) -> str:
        return self.kind.value
