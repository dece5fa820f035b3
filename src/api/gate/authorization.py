"""
Authorization Gate

Role check after authentication. Which roles an operation admits is
supplied from outside (configuration); operations without an entry admit
any authenticated role.
"""

from typing import AbstractSet, Iterable, Mapping, Tuple

from src.domain.entities import AccountRole
from src.domain.errors import Error, ErrorKind
from src.domain.result import Result, Return
from .context import InboundCall, RequestContext


def build_policy(raw: Mapping[str, Iterable[str]]) -> dict:
    """Turn {"operation": ["admin", ...]} into {"operation": frozenset(AccountRole)}"""
    return {
        operation: frozenset(AccountRole(role) for role in roles)
        for operation, roles in raw.items()
    }


class AuthorizationGate:
    """Pipeline stage: rejects callers whose role the operation does not admit"""

    def __init__(
        self,
        policy: Mapping[str, AbstractSet[AccountRole]],
        public_operations: AbstractSet[str],
    ):
        self.policy = dict(policy)
        self.public_operations = frozenset(public_operations)

    def __call__(
        self, context: RequestContext, call: InboundCall
    ) -> Result[Tuple[RequestContext, InboundCall]]:
        if call.operation in self.public_operations:
            return Return.ok((context, call))

        if context.identity is None:
            return Return.err(Error(ErrorKind.permission_denied, "Role not found"))

        allowed = self.policy.get(call.operation)
        if allowed is not None and context.identity.role not in allowed:
            return Return.err(
                Error(ErrorKind.permission_denied, "Insufficient role for this operation")
            )

        return Return.ok((context, call))
