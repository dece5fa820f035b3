"""
Gate pipeline: authenticate -> authorize -> handle.

Each stage is a function (RequestContext, InboundCall) -> Result of a new
(RequestContext, InboundCall). The pipeline stops at the first error.
"""

from typing import Callable, Iterable, Tuple

from src.app.services.token_issuer import TokenIssuer
from src.domain.result import Result, Return
from .authentication import AuthenticationGate
from .authorization import AuthorizationGate, build_policy
from .context import InboundCall, RequestContext

Stage = Callable[[RequestContext, InboundCall], Result[Tuple[RequestContext, InboundCall]]]

# Operations reachable without an access token
PUBLIC_OPERATIONS = frozenset({"register", "login", "activate", "refresh"})


class Pipeline:
    def __init__(self, stages: Iterable[Stage]):
        self.stages = list(stages)

    def run(
        self, context: RequestContext, call: InboundCall
    ) -> Result[Tuple[RequestContext, InboundCall]]:
        for stage in self.stages:
            result = stage(context, call)
            if result.is_err():
                return result
            context, call = result.value
        return Return.ok((context, call))


def public_operations_for(config) -> frozenset:
    if config.ACTIVATION_REQUIRES_AUTH:
        return PUBLIC_OPERATIONS - {"activate"}
    return PUBLIC_OPERATIONS


def build_pipeline(config, token_issuer: TokenIssuer) -> Pipeline:
    """Compose the authentication and authorization gates from configuration"""
    public_operations = public_operations_for(config)
    return Pipeline(
        [
            AuthenticationGate(token_issuer, public_operations),
            AuthorizationGate(build_policy(config.OPERATION_ROLES), public_operations),
        ]
    )
