from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """One-way password hashing - application layer"""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Hash a plaintext password (salted, slow)"""
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time check of a plaintext password against a stored hash"""
        pass

    @abstractmethod
    def dummy_verify(self, password: str) -> None:
        """Spend the same time as verify() when there is no stored hash to check"""
        pass
