from abc import ABC, abstractmethod

from src.domain.entities import LoginAttempt


class ILoginAttemptRepository(ABC):
    """Login attempt repository interface - application layer"""

    @abstractmethod
    async def create(self, attempt: LoginAttempt) -> LoginAttempt:
        """Record a login attempt"""
        pass

    @abstractmethod
    async def count_recent_failures(self, email: str, window_minutes: int = 15) -> int:
        """Count failed attempts for an email within the last window_minutes"""
        pass

    @abstractmethod
    async def count_recent_by_ip(self, ip_address: str, window_minutes: int = 15) -> int:
        """Count all attempts from an IP address within the last window_minutes"""
        pass

    @abstractmethod
    async def delete_older_than(self, max_age_days: int = 30) -> int:
        """Delete attempts older than max_age_days. Returns count."""
        pass
