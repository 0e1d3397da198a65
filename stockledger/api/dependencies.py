"""
Dependency injection for FastAPI.

Everything request handlers need is built from state the application
lifespan placed on ``app.state``: the settings, the connection pool and the
security services. Nothing here is a module-level singleton.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from stockledger.application.use_cases import (
    AdjustStockUseCase,
    CreateItemUseCase,
    CreateUserUseCase,
    CriticalStockUseCase,
    DailyMovementsUseCase,
    DeleteItemUseCase,
    DeleteUserUseCase,
    GetItemUseCase,
    ImportItemsUseCase,
    ListItemsUseCase,
    ListUsersUseCase,
    LoginUseCase,
    ResolveUserUseCase,
    SummaryReportUseCase,
    UpdateItemUseCase,
    UpdateUserUseCase,
)
from stockledger.config import Settings
from stockledger.core.entities.user import User
from stockledger.core.exceptions import AuthorizationError
from stockledger.core.interfaces import (
    IItemStore,
    IPasswordHasher,
    ITokenService,
    IUserStore,
)
from stockledger.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteItemStore,
    SQLiteUserStore,
)

bearer_scheme = HTTPBearer(auto_error=False)

# Largest id SQLite can store (signed 64-bit INTEGER)
MAX_ROW_ID = 2**63 - 1


# Application state
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_pool(request: Request) -> ConnectionPool:
    return request.app.state.pool


def get_password_hasher(request: Request) -> IPasswordHasher:
    return request.app.state.password_hasher


def get_token_service(request: Request) -> ITokenService:
    return request.app.state.token_service


# Store dependencies
def get_item_store(pool: ConnectionPool = Depends(get_pool)) -> IItemStore:
    """Get item store bound to the app's pool."""
    return SQLiteItemStore(pool)


def get_user_store(pool: ConnectionPool = Depends(get_pool)) -> IUserStore:
    """Get user store bound to the app's pool."""
    return SQLiteUserStore(pool)


# Authentication
def get_resolve_user_use_case(
    user_store: IUserStore = Depends(get_user_store),
    tokens: ITokenService = Depends(get_token_service),
) -> ResolveUserUseCase:
    return ResolveUserUseCase(user_store, tokens)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    use_case: ResolveUserUseCase = Depends(get_resolve_user_use_case),
) -> User:
    """Resolve the bearer token to a user. Raises AuthenticationError (401)."""
    token = credentials.credentials if credentials else None
    return await use_case.execute(token)


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Like get_current_user, but only admins pass (403 otherwise)."""
    if not user.is_admin:
        raise AuthorizationError()
    return user


# Item use cases
def get_list_items_use_case(store: IItemStore = Depends(get_item_store)) -> ListItemsUseCase:
    return ListItemsUseCase(store)


def get_get_item_use_case(store: IItemStore = Depends(get_item_store)) -> GetItemUseCase:
    return GetItemUseCase(store)


def get_create_item_use_case(store: IItemStore = Depends(get_item_store)) -> CreateItemUseCase:
    return CreateItemUseCase(store)


def get_update_item_use_case(store: IItemStore = Depends(get_item_store)) -> UpdateItemUseCase:
    return UpdateItemUseCase(store)


def get_delete_item_use_case(store: IItemStore = Depends(get_item_store)) -> DeleteItemUseCase:
    return DeleteItemUseCase(store)


def get_adjust_stock_use_case(store: IItemStore = Depends(get_item_store)) -> AdjustStockUseCase:
    return AdjustStockUseCase(store)


def get_import_items_use_case(store: IItemStore = Depends(get_item_store)) -> ImportItemsUseCase:
    return ImportItemsUseCase(store)


# Report use cases
def get_critical_stock_use_case(
    store: IItemStore = Depends(get_item_store),
) -> CriticalStockUseCase:
    return CriticalStockUseCase(store)


def get_daily_movements_use_case(
    store: IItemStore = Depends(get_item_store),
) -> DailyMovementsUseCase:
    return DailyMovementsUseCase(store)


def get_summary_report_use_case(
    store: IItemStore = Depends(get_item_store),
) -> SummaryReportUseCase:
    return SummaryReportUseCase(store)


# Auth and user use cases
def get_login_use_case(
    user_store: IUserStore = Depends(get_user_store),
    hasher: IPasswordHasher = Depends(get_password_hasher),
    tokens: ITokenService = Depends(get_token_service),
) -> LoginUseCase:
    return LoginUseCase(user_store, hasher, tokens)


def get_list_users_use_case(
    user_store: IUserStore = Depends(get_user_store),
) -> ListUsersUseCase:
    return ListUsersUseCase(user_store)


def get_create_user_use_case(
    user_store: IUserStore = Depends(get_user_store),
    hasher: IPasswordHasher = Depends(get_password_hasher),
) -> CreateUserUseCase:
    return CreateUserUseCase(user_store, hasher)


def get_update_user_use_case(
    user_store: IUserStore = Depends(get_user_store),
    hasher: IPasswordHasher = Depends(get_password_hasher),
) -> UpdateUserUseCase:
    return UpdateUserUseCase(user_store, hasher)


def get_delete_user_use_case(
    user_store: IUserStore = Depends(get_user_store),
) -> DeleteUserUseCase:
    return DeleteUserUseCase(user_store)
