"""
Request-scoped state passed explicitly through the gate pipeline.
"""

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional
from uuid import UUID

from src.domain.entities import AccountRole


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, as asserted by a verified access token"""

    account_id: UUID
    username: str
    role: AccountRole


@dataclass(frozen=True)
class InboundCall:
    """Transport-agnostic view of an incoming call"""

    operation: str
    headers: Mapping[str, str] = field(default_factory=dict)
    cookies: Mapping[str, str] = field(default_factory=dict)

    def header(self, name: str) -> Optional[str]:
        name = name.lower()
        for key, value in self.headers.items():
            if key.lower() == name:
                return value
        return None


@dataclass(frozen=True)
class RequestContext:
    """
    Per-request context handed to handlers.

    Immutable: stages return a new context instead of mutating this one.
    """

    operation: str
    identity: Optional[Identity] = None

    def with_identity(self, identity: Identity) -> "RequestContext":
        return replace(self, identity=identity)
