"""
Token Issuer

Mints signed access tokens and refresh tokens, records refresh sessions in
the session ledger, and verifies tokens presented back to the service.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict

from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import Account, AccountRole, Session
from src.domain.errors import Error, ErrorKind
from src.domain.result import Result, Return

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


@dataclass(frozen=True)
class TokenSettings:
    """Signing secret, lifetimes and issuer for one deployment"""

    secret: str
    access_ttl: timedelta
    refresh_ttl: timedelta
    issuer: str
    algorithm: str = "HS256"

    def __post_init__(self):
        if not self.secret:
            raise ValueError("Token signing secret is required")
        if self.access_ttl >= self.refresh_ttl:
            raise ValueError("Access token TTL must be shorter than refresh token TTL")

    @classmethod
    def from_config(cls, config) -> "TokenSettings":
        return cls(
            secret=config.JWT_SECRET,
            access_ttl=timedelta(minutes=config.ACCESS_TOKEN_TTL_MINUTES),
            refresh_ttl=timedelta(days=config.REFRESH_TOKEN_TTL_DAYS),
            issuer=config.JWT_ISSUER,
            algorithm=config.JWT_ALGORITHM,
        )


class AccessClaims(BaseModel):
    """Identity asserted by a verified access token"""

    model_config = ConfigDict(frozen=True)

    account_id: UUID
    username: str
    role: AccountRole
    issuer: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class IssuedTokens:
    """Token pair handed out on login"""

    access_token: str
    refresh_token: str
    session: Session


class TokenIssuer:
    """
    Issues and verifies tokens.

    Business Rules:
    - Access tokens are self-contained and never stored; they cannot be
      revoked before they expire, which is why their TTL is short
    - Refresh tokens are opaque to clients and backed by a Session row
    - A single shared secret and a single symmetric algorithm sign both
    - Verification checks signature, issuer, token type and expiry
    """

    def __init__(self, settings: TokenSettings):
        self.settings = settings

    def create_access_token(self, account: Account, now: Optional[datetime] = None) -> str:
        """
        Sign an access token for account.

        Args:
            account: Account the token asserts
            now: Issue time, defaults to the current time

        Returns:
            JWT string carrying sub, username, role, iss, iat, exp
        """
        now = now or datetime.now(UTC)
        payload = {
            "sub": str(account.id),
            "username": account.username,
            "role": AccountRole(account.role).value,
            "iss": self.settings.issuer,
            "iat": now,
            "exp": now + self.settings.access_ttl,
            "typ": ACCESS_TOKEN_TYPE,
        }
        return jwt.encode(payload, self.settings.secret, algorithm=self.settings.algorithm)

    def create_refresh_token(self, now: Optional[datetime] = None) -> tuple[str, datetime]:
        """Sign a random refresh token. Returns the token and its expiry."""
        now = now or datetime.now(UTC)
        expires_at = now + self.settings.refresh_ttl
        payload = {
            "jti": secrets.token_urlsafe(32),
            "iss": self.settings.issuer,
            "iat": now,
            "exp": expires_at,
            "typ": REFRESH_TOKEN_TYPE,
        }
        token = jwt.encode(payload, self.settings.secret, algorithm=self.settings.algorithm)
        return token, expires_at

    async def issue_tokens(
        self, account: Account, ledger: ISessionRepository
    ) -> IssuedTokens:
        """
        Mint an access token and a refresh token for account.

        The refresh session is written through the ledger; the caller owns
        the transaction and commits it.
        """
        now = datetime.now(UTC)
        access_token = self.create_access_token(account, now=now)
        refresh_token, expires_at = self.create_refresh_token(now=now)

        session = await ledger.create(
            Session(
                account_id=account.id,
                token=refresh_token,
                expires_at=expires_at.replace(tzinfo=None),
            )
        )
        return IssuedTokens(
            access_token=access_token, refresh_token=refresh_token, session=session
        )

    def _decode(self, token: str, token_type: str) -> Result[dict]:
        try:
            payload = jwt.decode(
                token,
                self.settings.secret,
                algorithms=[self.settings.algorithm],
                issuer=self.settings.issuer,
                options={"require_exp": True, "require_iat": True},
            )
        except JWTError as exc:
            logger.debug(f"Rejected {token_type} token: {exc}")
            return Return.err(Error(ErrorKind.token_invalid, "Invalid or expired token"))

        if payload.get("typ") != token_type:
            return Return.err(Error(ErrorKind.token_invalid, "Invalid or expired token"))

        return Return.ok(payload)

    def verify_access_token(self, token: str) -> Result[AccessClaims]:
        """
        Verify an access token.

        Returns:
            Result with AccessClaims, or Error(TOKEN_INVALID) for a bad
            signature, wrong issuer or type, missing claims, or expiry
        """
        result = self._decode(token, ACCESS_TOKEN_TYPE)
        if result.is_err():
            return result

        payload = result.value
        try:
            claims = AccessClaims(
                account_id=payload["sub"],
                username=payload["username"],
                role=payload["role"],
                issuer=payload["iss"],
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (KeyError, ValueError, TypeError):
            return Return.err(Error(ErrorKind.token_invalid, "Malformed token claims"))

        return Return.ok(claims)

    def verify_refresh_token(self, token: str) -> Result[dict]:
        """Verify signature, issuer, type and expiry of a refresh token"""
        return self._decode(token, REFRESH_TOKEN_TYPE)
