"""
RefreshToken Entity

One row per live session.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import Text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class RefreshToken(SQLModel, table=True):
    """
    RefreshToken entity - an issued refresh token, i.e. one active session.

    Business Rules:
    - The signed token string is the primary key
    - Single use: deleted when rotated, logged out, expired or evicted
    - At most MAX_SESSIONS rows per user; the oldest is evicted first
    """

    __tablename__ = "refresh_tokens"

    token: str = Field(primary_key=True, max_length=1024)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    # Client metadata
    device_info: Optional[str] = Field(default=None, sa_column=Column(Text))
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, nullable=False)
    )

    __table_args__ = (
        Index("idx_refresh_token_expires_at", "expires_at"),
        Index("idx_refresh_token_user_created", "user_id", "created_at"),
    )
