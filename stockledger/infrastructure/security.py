"""Password hashing (passlib) and signed access tokens (PyJWT)."""

from datetime import timedelta

import jwt
from passlib.context import CryptContext

from stockledger.config import AuthSettings, get_logger
from stockledger.core.entities.item import utcnow
from stockledger.core.entities.user import User, UserRole
from stockledger.core.exceptions import AuthenticationError
from stockledger.core.interfaces.security import (
    IPasswordHasher,
    ITokenService,
    TokenClaims,
)

logger = get_logger(__name__)


class PasswordHasher(IPasswordHasher):
    """Salted PBKDF2-SHA256 hashes via passlib."""

    def __init__(self):
        self._context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self._context.verify(password, password_hash)
        except ValueError:
            # Unrecognized hash format
            logger.warning("password_hash_unrecognized")
            return False


class TokenService(ITokenService):
    """HS* signed JWTs carrying the user's id, username and role."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 1440):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: AuthSettings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        )

    def issue(self, user: User) -> str:
        now = utcnow()
        payload = {
            "sub": str(user.id),
            "username": user.username,
            "role": user.role.value,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired") from None
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token") from None

        try:
            return TokenClaims(
                user_id=int(payload["sub"]),
                username=str(payload.get("username", "")),
                role=UserRole(payload.get("role", UserRole.USER.value)),
            )
        except ValueError:
            raise AuthenticationError("Invalid token") from None
