"""Account administration use cases."""

from stockledger.application.dto.requests import CreateUserRequest, UpdateUserRequest
from stockledger.application.dto.responses import MessageResponse, UserDetailResponse
from stockledger.config import get_logger
from stockledger.core.entities.user import User, UserRole
from stockledger.core.exceptions import (
    DuplicateUserError,
    UserNotFoundError,
    ValidationError,
)
from stockledger.core.interfaces.security import IPasswordHasher
from stockledger.core.interfaces.user_store import IUserStore

logger = get_logger(__name__)

# Accounts created by ``manage.py seed`` on a fresh install
DEFAULT_USERS: tuple[tuple[str, str, UserRole], ...] = (
    ("admin", "admin123", UserRole.ADMIN),
    ("user", "user123", UserRole.USER),
)


class ListUsersUseCase:
    def __init__(self, user_store: IUserStore):
        self._user_store = user_store

    async def execute(self) -> list[User]:
        return await self._user_store.list_users()

    def to_response(self, users: list[User]) -> list[UserDetailResponse]:
        return [UserDetailResponse.from_entity(user) for user in users]


class CreateUserUseCase:
    """Create an account with a hashed password."""

    def __init__(self, user_store: IUserStore, hasher: IPasswordHasher):
        self._user_store = user_store
        self._hasher = hasher

    async def execute(self, request: CreateUserRequest) -> User:
        if await self._user_store.get_by_username(request.username) is not None:
            raise DuplicateUserError(request.username)
        user = User(
            username=request.username,
            password_hash=self._hasher.hash(request.password),
            role=request.role,
        )
        return await self._user_store.create_user(user)

    def to_response(self, user: User) -> UserDetailResponse:
        return UserDetailResponse.from_entity(user)


class UpdateUserUseCase:
    """Change username, role or password of an account."""

    def __init__(self, user_store: IUserStore, hasher: IPasswordHasher):
        self._user_store = user_store
        self._hasher = hasher

    async def execute(self, user_id: int, request: UpdateUserRequest) -> User:
        user = await self._user_store.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if request.username is not None:
            username = request.username.strip()
            if not username:
                raise ValidationError("username", "username is required")
            user.username = username
        if request.role is not None:
            user.role = request.role
        if request.password:
            user.password_hash = self._hasher.hash(request.password)

        return await self._user_store.update_user(user)

    def to_response(self, user: User) -> UserDetailResponse:
        return UserDetailResponse.from_entity(user)


class DeleteUserUseCase:
    """Delete an account other than the caller's own."""

    def __init__(self, user_store: IUserStore):
        self._user_store = user_store

    async def execute(self, user_id: int, current_user: User) -> None:
        if user_id == current_user.id:
            raise ValidationError("id", "Cannot delete your own account", user_id)
        if not await self._user_store.delete_user(user_id):
            raise UserNotFoundError(user_id)

    def to_response(self) -> MessageResponse:
        return MessageResponse(message="User deleted successfully")


class SeedUsersUseCase:
    """Create the default accounts that do not exist yet."""

    def __init__(self, user_store: IUserStore, hasher: IPasswordHasher):
        self._user_store = user_store
        self._hasher = hasher

    async def execute(
        self,
        users: tuple[tuple[str, str, UserRole], ...] = DEFAULT_USERS,
    ) -> list[User]:
        created = []
        for username, password, role in users:
            if await self._user_store.get_by_username(username) is not None:
                logger.info("seed_user_exists", username=username)
                continue
            user = await self._user_store.create_user(
                User(
                    username=username,
                    password_hash=self._hasher.hash(password),
                    role=role,
                )
            )
            created.append(user)
        return created
