"""User domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from stockledger.core.entities.item import utcnow


class UserRole(str, Enum):
    """Access levels."""

    ADMIN = "admin"
    USER = "user"


class User(BaseModel):
    """An account that can sign in to the dashboard."""

    id: int | None = None
    username: str
    password_hash: str
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
