"""SQLite storage implementations."""

from stockledger.infrastructure.storage.sqlite.connection import ConnectionPool
from stockledger.infrastructure.storage.sqlite.item_store import SQLiteItemStore
from stockledger.infrastructure.storage.sqlite.migrations import (
    get_migration_status,
    run_migrations,
    verify_schema_integrity,
)
from stockledger.infrastructure.storage.sqlite.user_store import SQLiteUserStore

__all__ = [
    "ConnectionPool",
    "SQLiteItemStore",
    "SQLiteUserStore",
    "run_migrations",
    "get_migration_status",
    "verify_schema_integrity",
]
