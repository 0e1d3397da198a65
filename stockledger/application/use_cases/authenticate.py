"""Sign-in and token resolution use cases."""

from stockledger.application.dto.requests import LoginRequest
from stockledger.application.dto.responses import (
    CurrentUserResponse,
    LoginResponse,
    UserResponse,
)
from stockledger.config import get_logger
from stockledger.core.entities.user import User
from stockledger.core.exceptions import AuthenticationError
from stockledger.core.interfaces.security import IPasswordHasher, ITokenService
from stockledger.core.interfaces.user_store import IUserStore

logger = get_logger(__name__)


class LoginUseCase:
    """Exchange username and password for a signed access token."""

    def __init__(
        self,
        user_store: IUserStore,
        hasher: IPasswordHasher,
        tokens: ITokenService,
    ):
        self._user_store = user_store
        self._hasher = hasher
        self._tokens = tokens

    async def execute(self, request: LoginRequest) -> tuple[str, User]:
        user = await self._user_store.get_by_username(request.username)
        # Same error for unknown user and wrong password
        if user is None or not self._hasher.verify(request.password, user.password_hash):
            logger.warning("login_failed", username=request.username)
            raise AuthenticationError("Invalid credentials")

        token = self._tokens.issue(user)
        logger.info("login_succeeded", user_id=user.id, role=user.role.value)
        return token, user

    def to_response(self, result: tuple[str, User]) -> LoginResponse:
        token, user = result
        return LoginResponse(token=token, user=UserResponse.from_entity(user))


class ResolveUserUseCase:
    """Turn a bearer token into the account it was issued for."""

    def __init__(self, user_store: IUserStore, tokens: ITokenService):
        self._user_store = user_store
        self._tokens = tokens

    async def execute(self, token: str | None) -> User:
        if not token:
            raise AuthenticationError("No token provided")
        claims = self._tokens.verify(token)
        user = await self._user_store.get_user(claims.user_id)
        if user is None:
            raise AuthenticationError("User not found")
        return user

    def to_response(self, user: User) -> CurrentUserResponse:
        return CurrentUserResponse(user=UserResponse.from_entity(user))
