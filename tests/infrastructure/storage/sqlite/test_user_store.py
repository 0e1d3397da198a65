"""Tests for SQLiteUserStore."""

import pytest

from stockledger.core.entities.user import User, UserRole
from stockledger.core.exceptions import DuplicateUserError, UserNotFoundError


def _user(username: str = "clerk", role: UserRole = UserRole.USER) -> User:
    return User(username=username, password_hash="hash", role=role)


class TestSQLiteUserStore:
    """Tests for user persistence."""

    async def test_create_and_get(self, user_store):
        created = await user_store.create_user(_user(role=UserRole.ADMIN))

        loaded = await user_store.get_user(created.id)

        assert loaded.username == "clerk"
        assert loaded.role == UserRole.ADMIN
        assert loaded.password_hash == "hash"

    async def test_get_by_username_is_exact(self, user_store):
        await user_store.create_user(_user("Clerk"))
        assert await user_store.get_by_username("Clerk") is not None
        assert await user_store.get_by_username("clerk") is None

    async def test_duplicate_username(self, user_store):
        await user_store.create_user(_user())
        with pytest.raises(DuplicateUserError):
            await user_store.create_user(_user())

    async def test_list_users_in_creation_order(self, user_store):
        await user_store.create_user(_user("b"))
        await user_store.create_user(_user("a"))
        assert [u.username for u in await user_store.list_users()] == ["b", "a"]

    async def test_update(self, user_store):
        user = await user_store.create_user(_user())
        user.role = UserRole.ADMIN
        user.password_hash = "new-hash"

        await user_store.update_user(user)

        loaded = await user_store.get_user(user.id)
        assert loaded.role == UserRole.ADMIN
        assert loaded.password_hash == "new-hash"

    async def test_update_to_taken_username(self, user_store):
        await user_store.create_user(_user("taken"))
        user = await user_store.create_user(_user("other"))
        user.username = "taken"
        with pytest.raises(DuplicateUserError):
            await user_store.update_user(user)

    async def test_update_missing(self, user_store):
        ghost = _user()
        ghost.id = 404
        with pytest.raises(UserNotFoundError):
            await user_store.update_user(ghost)

    async def test_delete(self, user_store):
        user = await user_store.create_user(_user())
        assert await user_store.delete_user(user.id) is True
        assert await user_store.get_user(user.id) is None
        assert await user_store.delete_user(user.id) is False
