"""Abstract interfaces for password hashing and access tokens."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from stockledger.core.entities.user import User, UserRole


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified access token."""

    user_id: int
    username: str
    role: UserRole


class IPasswordHasher(ABC):
    """Interface for one-way password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        pass


class ITokenService(ABC):
    """Interface for issuing and verifying signed access tokens."""

    @abstractmethod
    def issue(self, user: User) -> str:
        """Create a signed token for the user."""
        pass

    @abstractmethod
    def verify(self, token: str) -> TokenClaims:
        """Verify a token. Raises AuthenticationError when invalid or expired."""
        pass
