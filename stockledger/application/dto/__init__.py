"""Data Transfer Objects for the API layer.

Request DTOs validate incoming bodies; response DTOs shape what is sent back.
"""

from stockledger.application.dto.requests import (
    CreateItemRequest,
    CreateUserRequest,
    ImportItemsRequest,
    LoginRequest,
    StockAdjustmentRequest,
    UpdateItemRequest,
    UpdateUserRequest,
)
from stockledger.application.dto.responses import (
    CategorySummaryResponse,
    CurrentUserResponse,
    DailyMovementResponse,
    ErrorResponse,
    HealthResponse,
    HistoryResponse,
    ImportResultResponse,
    ItemListResponse,
    ItemResponse,
    LoginResponse,
    MessageResponse,
    MovementDetailResponse,
    StockAdjustmentResponse,
    UserDetailResponse,
    UserResponse,
)

__all__ = [
    # Requests
    "CreateItemRequest",
    "UpdateItemRequest",
    "StockAdjustmentRequest",
    "ImportItemsRequest",
    "LoginRequest",
    "CreateUserRequest",
    "UpdateUserRequest",
    # Responses
    "ItemResponse",
    "HistoryResponse",
    "ItemListResponse",
    "StockAdjustmentResponse",
    "ImportResultResponse",
    "DailyMovementResponse",
    "MovementDetailResponse",
    "CategorySummaryResponse",
    "UserResponse",
    "UserDetailResponse",
    "LoginResponse",
    "CurrentUserResponse",
    "MessageResponse",
    "HealthResponse",
    "ErrorResponse",
]
