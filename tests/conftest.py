"""Pytest configuration and fixtures."""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest

from stockledger.config import APISettings, AuthSettings, Settings, StorageSettings
from stockledger.core.entities.item import Category
from stockledger.core.services import ledger
from stockledger.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteItemStore,
    SQLiteUserStore,
    run_migrations,
)

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway database."""
    return Settings(
        environment="development",
        log_level="WARNING",
        storage=StorageSettings(data_dir=tmp_path / "data", pool_size=2),
        api=APISettings(cors_origins=[]),
        auth=AuthSettings(jwt_secret=TEST_JWT_SECRET),
    )


@pytest.fixture
async def pool(settings: Settings) -> AsyncIterator[ConnectionPool]:
    """Migrated database with an open connection pool."""
    await run_migrations(settings.storage.db_path)
    pool = ConnectionPool.from_settings(settings.storage)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def item_store(pool: ConnectionPool) -> SQLiteItemStore:
    return SQLiteItemStore(pool)


@pytest.fixture
def user_store(pool: ConnectionPool) -> SQLiteUserStore:
    return SQLiteUserStore(pool)


@pytest.fixture
def make_item():
    """Build an unsaved item the way the create endpoint does."""

    def _make(
        description: str = "Hammer",
        unit: str = "pcs",
        category: Category = Category.TOOL,
        stock_in: float = 0.0,
        stock_out: float = 0.0,
        min_stock: float = 0.0,
    ):
        return ledger.open_item(description, unit, category, stock_in, stock_out, min_stock)

    return _make
