"""Application use cases."""

from stockledger.application.use_cases.adjust_stock import (
    AdjustStockResult,
    AdjustStockUseCase,
)
from stockledger.application.use_cases.authenticate import (
    LoginUseCase,
    ResolveUserUseCase,
)
from stockledger.application.use_cases.import_items import ImportItemsUseCase, ImportResult
from stockledger.application.use_cases.list_items import (
    ListItemsParams,
    ListItemsResult,
    ListItemsUseCase,
)
from stockledger.application.use_cases.manage_items import (
    CreateItemUseCase,
    DeleteItemUseCase,
    GetItemUseCase,
    UpdateItemUseCase,
)
from stockledger.application.use_cases.manage_users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    ListUsersUseCase,
    SeedUsersUseCase,
    UpdateUserUseCase,
)
from stockledger.application.use_cases.reports import (
    CriticalStockUseCase,
    DailyMovementsUseCase,
    SummaryReportUseCase,
)

__all__ = [
    # Items
    "ListItemsUseCase",
    "ListItemsParams",
    "ListItemsResult",
    "GetItemUseCase",
    "CreateItemUseCase",
    "UpdateItemUseCase",
    "DeleteItemUseCase",
    "AdjustStockUseCase",
    "AdjustStockResult",
    "ImportItemsUseCase",
    "ImportResult",
    # Reports
    "CriticalStockUseCase",
    "DailyMovementsUseCase",
    "SummaryReportUseCase",
    # Auth and users
    "LoginUseCase",
    "ResolveUserUseCase",
    "ListUsersUseCase",
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "DeleteUserUseCase",
    "SeedUsersUseCase",
]
