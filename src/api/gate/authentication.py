"""
Request Authentication Gate

Validates the access token of a protected call and puts the caller's
identity into the request context. Public operations pass through.
"""

from typing import AbstractSet, Optional, Tuple

from src.app.services.token_issuer import TokenIssuer
from src.domain.errors import Error, ErrorKind
from src.domain.result import Result, Return
from .context import Identity, InboundCall, RequestContext

ACCESS_TOKEN_COOKIE = "access_token"


def extract_token(call: InboundCall) -> Optional[str]:
    """
    Find the access token of a call.

    The Authorization header ("Bearer <token>") wins; the access_token
    cookie is the fallback.
    """
    authorization = call.header("authorization")
    if authorization:
        parts = authorization.strip().split(" ", 1)
        if len(parts) == 2 and parts[0].lower() == "bearer" and parts[1].strip():
            return parts[1].strip()

    cookie_token = call.cookies.get(ACCESS_TOKEN_COOKIE)
    if cookie_token:
        return cookie_token

    return None


class AuthenticationGate:
    """Pipeline stage: (context, call) -> authenticated (context, call) or error"""

    def __init__(self, token_issuer: TokenIssuer, public_operations: AbstractSet[str]):
        self.token_issuer = token_issuer
        self.public_operations = frozenset(public_operations)

    def __call__(
        self, context: RequestContext, call: InboundCall
    ) -> Result[Tuple[RequestContext, InboundCall]]:
        if call.operation in self.public_operations:
            return Return.ok((context, call))

        token = extract_token(call)
        if token is None:
            return Return.err(Error(ErrorKind.unauthenticated, "Missing auth token"))

        verified = self.token_issuer.verify_access_token(token)
        if verified.is_err():
            return Return.err(Error(ErrorKind.unauthenticated, "Invalid or expired token"))

        claims = verified.value
        identity = Identity(
            account_id=claims.account_id,
            username=claims.username,
            role=claims.role,
        )
        return Return.ok((context.with_identity(identity), call))
