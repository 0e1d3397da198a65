"""Unit tests for domain exceptions."""

import pytest

from stockledger.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DatabaseError,
    DuplicateUserError,
    ImportRowError,
    InsufficientStockError,
    ItemNotFoundError,
    NotFoundError,
    StockLedgerError,
    StorageError,
    UserNotFoundError,
    ValidationError,
)


class TestStockLedgerError:
    """Tests for base StockLedgerError exception."""

    def test_basic_initialization(self):
        error = StockLedgerError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "StockLedgerError"
        assert error.details == {}

    def test_with_custom_code(self):
        error = StockLedgerError("Error message", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_to_dict(self):
        error = StockLedgerError("Test error", code="TEST_CODE", details={"extra": "info"})
        assert error.to_dict() == {
            "error": "TEST_CODE",
            "message": "Test error",
            "details": {"extra": "info"},
        }

    def test_subclass_code_defaults_to_class_name(self):
        assert StorageError("disk full").code == "StorageError"


class TestValidationErrors:
    """Tests for input validation exceptions."""

    def test_validation_error(self):
        error = ValidationError("quantity", "Quantity must be a positive number", -1)
        assert error.code == "VALIDATION_ERROR"
        assert error.field == "quantity"
        assert error.details == {"field": "quantity", "value": "-1"}

    def test_validation_error_truncates_value(self):
        error = ValidationError("description", "too long", "x" * 500)
        assert len(error.details["value"]) == 100

    def test_validation_error_without_value(self):
        error = ValidationError("unit", "unit is required")
        assert error.details["value"] is None

    def test_import_row_error_prefixes_row_number(self):
        error = ImportRowError(4, "Row is not an object")
        assert error.message == "Row 4: Row is not an object"
        assert error.row_number == 4
        assert error.details["row"] == 4
        assert isinstance(error, ValidationError)


class TestLedgerErrors:
    """Tests for stock ledger exceptions."""

    def test_insufficient_stock_message_uses_whole_numbers(self):
        error = InsufficientStockError(7, available=5.0, requested=10.0)
        assert error.message == "Insufficient stock. Available: 5, Requested: 10"
        assert error.code == "INSUFFICIENT_STOCK"
        assert error.details == {"item_id": 7, "available": 5.0, "requested": 10.0}

    def test_insufficient_stock_message_keeps_decimals(self):
        error = InsufficientStockError(1, available=2.5, requested=3.75)
        assert error.message == "Insufficient stock. Available: 2.5, Requested: 3.75"


class TestLookupErrors:
    """Tests for not-found and duplicate exceptions."""

    def test_item_not_found(self):
        error = ItemNotFoundError(42)
        assert error.message == "Item not found"
        assert error.code == "ITEM_NOT_FOUND"
        assert error.details["item_id"] == 42
        assert isinstance(error, NotFoundError)

    def test_user_not_found(self):
        error = UserNotFoundError(3)
        assert error.message == "User not found"
        assert isinstance(error, NotFoundError)

    def test_duplicate_user(self):
        error = DuplicateUserError("admin")
        assert error.message == "Username already exists"
        assert error.details["username"] == "admin"


class TestSecurityErrors:
    """Tests for authentication and authorization exceptions."""

    def test_authentication_default_reason(self):
        assert AuthenticationError().message == "Invalid token"

    def test_authentication_custom_reason(self):
        error = AuthenticationError("Token expired")
        assert error.message == "Token expired"
        assert error.code == "AUTHENTICATION_FAILED"

    def test_authorization(self):
        error = AuthorizationError()
        assert error.message == "Access denied. Admin only."
        assert error.details["required_role"] == "admin"


class TestStorageErrors:
    """Tests for storage exceptions."""

    def test_database_error(self):
        error = DatabaseError("insert", "database is locked")
        assert "insert" in error.message
        assert error.code == "DATABASE_ERROR"
        assert isinstance(error, StorageError)


class TestExceptionHierarchy:
    """All domain errors share one base."""

    @pytest.mark.parametrize(
        "exc",
        [
            ValidationError("f", "m"),
            ImportRowError(1, "r"),
            InsufficientStockError(1, 0, 1),
            ItemNotFoundError(1),
            UserNotFoundError(1),
            DuplicateUserError("u"),
            AuthenticationError(),
            AuthorizationError(),
            DatabaseError("op", "err"),
        ],
    )
    def test_is_stock_ledger_error(self, exc):
        assert isinstance(exc, StockLedgerError)
