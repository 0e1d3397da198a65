"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization. Field names are
snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stockledger.core.entities.item import (
    Category,
    HistoryRecord,
    Item,
    MovementType,
    utcnow,
)
from stockledger.core.entities.report import CategorySummary, DailyMovement
from stockledger.core.entities.user import User, UserRole


class CamelResponse(BaseModel):
    """Base for response bodies."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HistoryResponse(CamelResponse):
    """One stock movement."""

    movement_type: MovementType = Field(..., alias="type")
    quantity: float
    notes: str | None = None
    occurred_at: datetime = Field(..., alias="date")

    @classmethod
    def from_entity(cls, record: HistoryRecord) -> "HistoryResponse":
        return cls(
            movement_type=record.movement_type,
            quantity=record.quantity,
            notes=record.notes,
            occurred_at=record.occurred_at,
        )


class ItemResponse(CamelResponse):
    """Item response DTO."""

    id: int = Field(..., description="Item ID")
    description: str
    unit: str
    category: Category
    stock_in: float = Field(..., description="Cumulative quantity received")
    stock_out: float = Field(..., description="Cumulative quantity dispensed")
    total_stock: float = Field(..., description="max(0, stockIn - stockOut)")
    min_stock: float = 0.0
    history: list[HistoryResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, item: Item) -> "ItemResponse":
        return cls(
            id=item.id,
            description=item.description,
            unit=item.unit,
            category=item.category,
            stock_in=item.stock_in,
            stock_out=item.stock_out,
            total_stock=item.total_stock,
            min_stock=item.min_stock,
            history=[HistoryResponse.from_entity(r) for r in item.history],
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class ItemListResponse(CamelResponse):
    """One page of items."""

    items: list[ItemResponse]
    total: int = Field(..., description="Matches across all pages")
    total_pages: int
    current_page: int


class StockAdjustmentResponse(CamelResponse):
    """Result of a stock adjustment."""

    message: str
    item: ItemResponse


class ImportResultResponse(CamelResponse):
    """Counts and per-row errors from a bulk import."""

    created: int = 0
    updated: int = 0
    errors: list[str] = Field(default_factory=list)


class MovementDetailResponse(CamelResponse):
    """One movement inside a daily report window."""

    movement_type: MovementType = Field(..., alias="type")
    quantity: float
    notes: str | None = None
    time: str = Field(..., description="UTC time of day, HH:MM:SS")


class DailyMovementResponse(ItemResponse):
    """Item plus its totals for the requested day."""

    daily_in: float
    daily_out: float
    total_movements: int
    movement_details: list[MovementDetailResponse]

    @classmethod
    def from_report(cls, report: DailyMovement) -> "DailyMovementResponse":
        base = ItemResponse.from_entity(report.item)
        return cls(
            **base.model_dump(),
            daily_in=report.daily_in,
            daily_out=report.daily_out,
            total_movements=report.total_movements,
            movement_details=[
                MovementDetailResponse(
                    movement_type=r.movement_type,
                    quantity=r.quantity,
                    notes=r.notes,
                    time=r.occurred_at.strftime("%H:%M:%S"),
                )
                for r in report.movements
            ],
        )


class CategorySummaryResponse(CamelResponse):
    """Aggregated counters for one category."""

    category: Category
    total_items: int
    total_stock_in: float
    total_stock_out: float
    total_current_stock: float

    @classmethod
    def from_entity(cls, summary: CategorySummary) -> "CategorySummaryResponse":
        return cls(
            category=summary.category,
            total_items=summary.total_items,
            total_stock_in=summary.total_stock_in,
            total_stock_out=summary.total_stock_out,
            total_current_stock=summary.total_current_stock,
        )


class UserResponse(CamelResponse):
    """Public view of an account; never carries the password hash."""

    id: int
    username: str
    role: UserRole

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(id=user.id, username=user.username, role=user.role)


class UserDetailResponse(UserResponse):
    """Account with timestamps, for user management."""

    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserDetailResponse":
        return cls(
            id=user.id,
            username=user.username,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class LoginResponse(CamelResponse):
    """Issued token and the signed-in user."""

    token: str
    user: UserResponse


class CurrentUserResponse(CamelResponse):
    user: UserResponse


class MessageResponse(CamelResponse):
    message: str


class HealthResponse(CamelResponse):
    """Health check response."""

    status: str = Field(..., description="ok or degraded")
    version: str
    uptime_seconds: float
    database: str = Field(..., description="ok or error")


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. ITEM_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | dict[str, Any] | None = Field(
        default=None, description="Additional details (structured for domain errors)"
    )
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=utcnow)
