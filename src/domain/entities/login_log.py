"""
LoginLog Entity

Append-only record of login attempts.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import LoginLogType


class LoginLog(SQLModel, table=True):
    """
    LoginLog entity - audit trail for authentication attempts.

    Business Rules:
    - Immutable (never updated or deleted)
    - account_id is empty when the username was unknown
    - Writes are best-effort and never fail the operation being audited
    """

    __tablename__ = "login_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    account_id: Optional[UUID] = Field(default=None, foreign_key="accounts.id")

    message: str = Field(max_length=255)
    log_type: LoginLogType = Field(nullable=False)

    # Client metadata
    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_login_log_account_id", "account_id"),
        Index("idx_login_log_created_at", "created_at"),
    )
