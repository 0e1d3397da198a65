"""SQLite implementation of user storage."""

import sqlite3

import aiosqlite

from stockledger.config import get_logger
from stockledger.core.entities.item import utcnow
from stockledger.core.entities.user import User, UserRole
from stockledger.core.exceptions import DuplicateUserError, UserNotFoundError
from stockledger.core.interfaces.user_store import IUserStore
from stockledger.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    from_db_time,
    to_db_time,
)

logger = get_logger(__name__)


class SQLiteUserStore(IUserStore):
    """SQLite implementation of user account storage."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def create_user(self, user: User) -> User:
        """Create a new user."""
        now = utcnow()
        user.created_at = now
        user.updated_at = now
        try:
            async with self._pool.transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO users (username, password_hash, role, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        user.username,
                        user.password_hash,
                        user.role.value,
                        to_db_time(user.created_at),
                        to_db_time(user.updated_at),
                    ),
                )
                user.id = cursor.lastrowid
        except sqlite3.IntegrityError as e:
            raise DuplicateUserError(user.username) from e

        logger.info("user_created", user_id=user.id, role=user.role.value)
        return user

    async def get_user(self, user_id: int) -> User | None:
        """Get user by ID."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def get_by_username(self, username: str) -> User | None:
        """Get user by exact username."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT * FROM users WHERE username = ?", (username,)
            )
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def list_users(self) -> list[User]:
        """List all users."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute("SELECT * FROM users ORDER BY id")
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    async def update_user(self, user: User) -> User:
        """Persist username, role and password hash."""
        user.updated_at = utcnow()
        try:
            async with self._pool.transaction() as conn:
                cursor = await conn.execute(
                    """
                    UPDATE users SET
                        username = ?,
                        password_hash = ?,
                        role = ?,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        user.username,
                        user.password_hash,
                        user.role.value,
                        to_db_time(user.updated_at),
                        user.id,
                    ),
                )
                if cursor.rowcount == 0:
                    raise UserNotFoundError(user.id)
        except sqlite3.IntegrityError as e:
            raise DuplicateUserError(user.username) from e

        logger.info("user_updated", user_id=user.id)
        return user

    async def delete_user(self, user_id: int) -> bool:
        """Delete a user."""
        async with self._pool.transaction() as conn:
            cursor = await conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("user_deleted", user_id=user_id)
            return deleted

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        """Convert a database row to a User entity."""
        return User(
            id=row["id"],
            username=row["username"],
            password_hash=row["password_hash"],
            role=UserRole(row["role"]),
            created_at=from_db_time(row["created_at"]),
            updated_at=from_db_time(row["updated_at"]),
        )
