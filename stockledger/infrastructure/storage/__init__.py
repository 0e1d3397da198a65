"""Storage implementations."""

from stockledger.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteItemStore,
    SQLiteUserStore,
)

__all__ = ["ConnectionPool", "SQLiteItemStore", "SQLiteUserStore"]
