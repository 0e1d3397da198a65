"""Abstract interface for user storage."""

from abc import ABC, abstractmethod

from stockledger.core.entities.user import User


class IUserStore(ABC):
    """Interface for user account persistence."""

    @abstractmethod
    async def create_user(self, user: User) -> User:
        """Create a new user. Raises DuplicateUserError on a taken username."""
        pass

    @abstractmethod
    async def get_user(self, user_id: int) -> User | None:
        """Get user by ID."""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> User | None:
        """Get user by exact username."""
        pass

    @abstractmethod
    async def list_users(self) -> list[User]:
        """List all users."""
        pass

    @abstractmethod
    async def update_user(self, user: User) -> User:
        """Persist username, role and password hash."""
        pass

    @abstractmethod
    async def delete_user(self, user_id: int) -> bool:
        """Delete a user."""
        pass
