"""
Domain exceptions for the stock ledger.

Provides specific exception types for different error scenarios.
"""

from typing import Any


def _format_quantity(value: float) -> str:
    """Render whole quantities without a trailing .0."""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


class StockLedgerError(Exception):
    """Base exception for all stock ledger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(StockLedgerError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "value": str(value)[:100] if value is not None else None,
            },
        )
        self.field = field


class ImportRowError(ValidationError):
    """A single spreadsheet row could not be imported."""

    def __init__(self, row_number: int, reason: str):
        super().__init__(field="row", message=f"Row {row_number}: {reason}")
        self.details["row"] = row_number
        self.row_number = row_number


# Ledger Exceptions
class InsufficientStockError(StockLedgerError):
    """Stock-out exceeds the quantity currently on hand."""

    def __init__(self, item_id: int | None, available: float, requested: float):
        super().__init__(
            f"Insufficient stock. Available: {_format_quantity(available)}, "
            f"Requested: {_format_quantity(requested)}",
            code="INSUFFICIENT_STOCK",
            details={
                "item_id": item_id,
                "available": available,
                "requested": requested,
            },
        )
        self.available = available
        self.requested = requested


# Lookup Exceptions
class NotFoundError(StockLedgerError):
    """Requested entity does not exist."""

    pass


class ItemNotFoundError(NotFoundError):
    """Item not found in storage."""

    def __init__(self, item_id: int):
        super().__init__(
            "Item not found",
            code="ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


class UserNotFoundError(NotFoundError):
    """User not found in storage."""

    def __init__(self, user_id: int):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class DuplicateUserError(StockLedgerError):
    """Username is already taken."""

    def __init__(self, username: str):
        super().__init__(
            "Username already exists",
            code="DUPLICATE_USER",
            details={"username": username},
        )


# Security Exceptions
class AuthenticationError(StockLedgerError):
    """Missing, invalid or expired credentials."""

    def __init__(self, reason: str = "Invalid token"):
        super().__init__(reason, code="AUTHENTICATION_FAILED")


class AuthorizationError(StockLedgerError):
    """Authenticated user lacks the required role."""

    def __init__(self, required_role: str = "admin"):
        super().__init__(
            "Access denied. Admin only.",
            code="FORBIDDEN",
            details={"required_role": required_role},
        )


# Storage Exceptions
class StorageError(StockLedgerError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )
