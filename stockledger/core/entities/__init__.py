"""Domain entities."""

from stockledger.core.entities.item import (
    Category,
    HistoryRecord,
    Item,
    MovementType,
    StockStatus,
    utcnow,
)
from stockledger.core.entities.report import CategorySummary, DailyMovement
from stockledger.core.entities.user import User, UserRole

__all__ = [
    "Category",
    "CategorySummary",
    "DailyMovement",
    "HistoryRecord",
    "Item",
    "MovementType",
    "StockStatus",
    "User",
    "UserRole",
    "utcnow",
]
