"""
Credential Entity

Password hashes owned by an account.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class Credential(SQLModel, table=True):
    """
    Credential entity - bcrypt password hash for an account.

    Business Rules:
    - Belongs to exactly one account
    - At most one active credential per account; prior credentials are
      deactivated before a new one is created
    """

    __tablename__ = "credentials"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    account_id: UUID = Field(foreign_key="accounts.id", nullable=False, index=True)

    password_hash: str = Field(max_length=255)
    active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_credential_account_active", "account_id", "active"),)
