"""
TokenBlacklist Entity

Explicit revocation records for refresh tokens.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class TokenBlacklist(SQLModel, table=True):
    """
    TokenBlacklist entity - a revoked token.

    Business Rules:
    - Independent of refresh_tokens: a row survives the token's deletion
    - expires_at is copied from the revoked token, never later
    - An expired row counts as not blacklisted and is purged lazily
    """

    __tablename__ = "token_blacklist"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    token: str = Field(unique=True, index=True, max_length=1024)
    user_id: Optional[UUID] = Field(default=None, index=True)
    reason: Optional[str] = Field(default=None, max_length=255)
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_token_blacklist_expires_at", "expires_at"),)
