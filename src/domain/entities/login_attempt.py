"""
LoginAttempt Entity

Append-only record of every login attempt.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class LoginAttempt(SQLModel, table=True):
    """
    LoginAttempt entity - immutable audit of login attempts.

    Business Rules:
    - Written once, never updated
    - Failed attempts within the lockout window drive account lockout
    - Pruned after the retention period (30 days by default)
    """

    __tablename__ = "login_attempts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255)
    ip_address: str = Field(max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)
    success: bool = Field(default=False)
    fail_reason: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, nullable=False)
    )

    __table_args__ = (
        Index("idx_login_attempt_email_created", "email", "created_at"),
        Index("idx_login_attempt_ip_created", "ip_address", "created_at"),
    )
