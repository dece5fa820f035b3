"""
Account Entity

Represents a person who can authenticate against the service.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow
from .enums import AccountRole


class Account(SQLModel, table=True):
    """
    Account entity - the identity state machine.

    Business Rules:
    - Username must be unique across all accounts
    - Role is one of user, admin, super-admin
    - Created active but not activated; login requires both flags
    - active is the enabled/disabled switch, activated is the one-way
      activation step
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=150)
    role: AccountRole = Field(nullable=False)

    active: bool = Field(default=True)
    activated: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
