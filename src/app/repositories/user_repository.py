from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import User, UserPublic


class EmailAlreadyExistsError(Exception):
    """Raised when a user insert violates the unique email constraint"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already registered: {email}")


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises EmailAlreadyExistsError on duplicate email."""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def delete(self, user_id: UUID) -> bool:
        """Delete a user. Returns True if a row was removed."""
        pass

    @abstractmethod
    async def get_all(self) -> List[UserPublic]:
        """List all users without password hashes"""
        pass
