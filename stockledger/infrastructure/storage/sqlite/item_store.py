"""SQLite implementation of item storage."""

from datetime import datetime

import aiosqlite

from stockledger.config import get_logger
from stockledger.core.entities.item import (
    Category,
    HistoryRecord,
    Item,
    MovementType,
    StockStatus,
)
from stockledger.core.entities.report import CategorySummary
from stockledger.core.exceptions import StorageError
from stockledger.core.interfaces.item_store import (
    IItemStore,
    ItemMutation,
    ItemPage,
    ItemQuery,
)
from stockledger.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    from_db_time,
    to_db_time,
)

logger = get_logger(__name__)

# Percentage buckets only apply once something has been received
STOCK_STATUS_CLAUSES: dict[StockStatus, str] = {
    StockStatus.CRITICAL: "stock_in > 0 AND total_stock < stock_in * 0.2",
    StockStatus.LOW: (
        "stock_in > 0 AND total_stock >= stock_in * 0.2 AND total_stock < stock_in * 0.5"
    ),
    StockStatus.GOOD: "stock_in > 0 AND total_stock >= stock_in * 0.5",
    StockStatus.OUT: "total_stock = 0",
}

# Field name -> column; anything else is rejected before reaching SQL
SORTABLE_COLUMNS: dict[str, str] = {
    "id": "id",
    "description": "description",
    "unit": "unit",
    "category": "category",
    "stock_in": "stock_in",
    "stock_out": "stock_out",
    "total_stock": "total_stock",
    "min_stock": "min_stock",
    "created_at": "created_at",
    "updated_at": "updated_at",
}


class SQLiteItemStore(IItemStore):
    """SQLite implementation of item and stock history storage."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def create_item(self, item: Item) -> Item:
        """Insert an item together with its initial history."""
        async with self._pool.transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO items (
                    description, unit, category, stock_in, stock_out,
                    total_stock, min_stock, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.description,
                    item.unit,
                    item.category.value,
                    item.stock_in,
                    item.stock_out,
                    item.total_stock,
                    item.min_stock,
                    to_db_time(item.created_at),
                    to_db_time(item.updated_at),
                ),
            )
            item.id = cursor.lastrowid
            item.history = [
                await self._insert_record(conn, item.id, record) for record in item.history
            ]
            logger.info(
                "item_created",
                item_id=item.id,
                category=item.category.value,
                history_records=len(item.history),
            )
            return item

    async def get_item(self, item_id: int) -> Item | None:
        """Get item (with history) by ID."""
        async with self._pool.acquire() as conn:
            return await self._fetch_item(conn, item_id)

    async def find_by_description(
        self, description: str, category: Category
    ) -> Item | None:
        """Case-insensitive exact match on trimmed description within a category."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM items
                WHERE category = ? AND casefold(trim(description)) = casefold(?)
                ORDER BY id
                LIMIT 1
                """,
                (category.value, description.strip()),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await self._attach_history(conn, [self._row_to_item(row)])
            return items[0]

    async def mutate_item(self, item_id: int, mutation: ItemMutation) -> Item | None:
        """
        Atomically read, mutate and persist one item.

        The write lock is held from the read until commit, so concurrent
        adjustments serialize instead of overwriting each other. Any
        exception raised by ``mutation`` rolls the whole write back.
        """
        async with self._pool.transaction(immediate=True) as conn:
            item = await self._fetch_item(conn, item_id)
            if item is None:
                return None

            persisted = list(item.history)
            mutation(item)

            if item.history[: len(persisted)] != persisted:
                raise StorageError(
                    "Stock history is append-only",
                    code="HISTORY_REWRITE",
                    details={"item_id": item_id},
                )

            await conn.execute(
                """
                UPDATE items SET
                    description = ?,
                    unit = ?,
                    category = ?,
                    stock_in = ?,
                    stock_out = ?,
                    total_stock = ?,
                    min_stock = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    item.description,
                    item.unit,
                    item.category.value,
                    item.stock_in,
                    item.stock_out,
                    item.total_stock,
                    item.min_stock,
                    to_db_time(item.updated_at),
                    item_id,
                ),
            )

            appended = [
                await self._insert_record(conn, item_id, record)
                for record in item.history[len(persisted):]
            ]
            item.history = persisted + appended

            logger.info(
                "item_updated",
                item_id=item_id,
                total_stock=item.total_stock,
                new_records=len(appended),
            )
            return item

    async def delete_item(self, item_id: int) -> bool:
        """Hard-delete an item; history rows cascade."""
        async with self._pool.transaction() as conn:
            cursor = await conn.execute("DELETE FROM items WHERE id = ?", (item_id,))
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("item_deleted", item_id=item_id)
            return deleted

    async def list_items(self, query: ItemQuery) -> ItemPage:
        """List items matching the query, one page at a time."""
        where, params = self._build_filters(query)
        column = SORTABLE_COLUMNS.get(query.sort_by)
        if column is None:
            raise StorageError(
                f"Unsupported sort field: {query.sort_by}",
                code="INVALID_SORT",
                details={"sort_by": query.sort_by},
            )
        direction = "DESC" if query.descending else "ASC"

        async with self._pool.acquire() as conn:
            cursor = await conn.execute(f"SELECT COUNT(*) FROM items {where}", params)
            total = (await cursor.fetchone())[0]

            cursor = await conn.execute(
                f"""
                SELECT * FROM items {where}
                ORDER BY {column} {direction}, id {direction}
                LIMIT ? OFFSET ?
                """,
                (*params, query.limit, query.offset),
            )
            rows = await cursor.fetchall()
            items = await self._attach_history(conn, [self._row_to_item(r) for r in rows])

        return ItemPage(items=items, total=total)

    async def list_critical(self) -> list[Item]:
        """Items whose current stock is below 20% of everything received."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM items
                WHERE total_stock < stock_in * 0.2
                ORDER BY description, id
                """
            )
            rows = await cursor.fetchall()
            return await self._attach_history(conn, [self._row_to_item(r) for r in rows])

    async def list_with_movements(
        self,
        start: datetime,
        end: datetime,
        category: Category | None = None,
    ) -> list[Item]:
        """Items with at least one history record in [start, end)."""
        sql = """
            SELECT * FROM items i
            WHERE EXISTS (
                SELECT 1 FROM item_history h
                WHERE h.item_id = i.id AND h.occurred_at >= ? AND h.occurred_at < ?
            )
        """
        params: list = [to_db_time(start), to_db_time(end)]
        if category is not None:
            sql += " AND i.category = ?"
            params.append(category.value)
        sql += " ORDER BY i.description, i.id"

        async with self._pool.acquire() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
            return await self._attach_history(conn, [self._row_to_item(r) for r in rows])

    async def summarize_by_category(self) -> list[CategorySummary]:
        """Aggregate counters per category."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT
                    category,
                    COUNT(*) AS total_items,
                    COALESCE(SUM(stock_in), 0) AS total_stock_in,
                    COALESCE(SUM(stock_out), 0) AS total_stock_out,
                    COALESCE(SUM(total_stock), 0) AS total_current_stock
                FROM items
                GROUP BY category
                ORDER BY category
                """
            )
            rows = await cursor.fetchall()
            return [
                CategorySummary(
                    category=Category(row["category"]),
                    total_items=row["total_items"],
                    total_stock_in=float(row["total_stock_in"]),
                    total_stock_out=float(row["total_stock_out"]),
                    total_current_stock=float(row["total_current_stock"]),
                )
                for row in rows
            ]

    async def clear_items(self) -> int:
        """Delete every item. Returns the number removed."""
        async with self._pool.transaction() as conn:
            cursor = await conn.execute("DELETE FROM items")
            removed = cursor.rowcount
            logger.warning("items_cleared", removed=removed)
            return removed

    @staticmethod
    def _build_filters(query: ItemQuery) -> tuple[str, list]:
        """Translate query filters into a WHERE clause and parameters."""
        clauses: list[str] = []
        params: list = []

        if query.category is not None:
            clauses.append("category = ?")
            params.append(query.category.value)
        if query.unit:
            clauses.append("unit = ?")
            params.append(query.unit)
        if query.search:
            clauses.append("instr(casefold(description), casefold(?)) > 0")
            params.append(query.search)
        if query.stock_status is not None:
            clauses.append(f"({STOCK_STATUS_CLAUSES[query.stock_status]})")

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, params

    async def _fetch_item(self, conn: aiosqlite.Connection, item_id: int) -> Item | None:
        cursor = await conn.execute("SELECT * FROM items WHERE id = ?", (item_id,))
        row = await cursor.fetchone()
        if row is None:
            return None
        items = await self._attach_history(conn, [self._row_to_item(row)])
        return items[0]

    async def _attach_history(
        self, conn: aiosqlite.Connection, items: list[Item]
    ) -> list[Item]:
        """Load history for a batch of items in one query, oldest first."""
        if not items:
            return items
        by_id = {item.id: item for item in items}
        placeholders = ",".join("?" for _ in by_id)
        cursor = await conn.execute(
            f"""
            SELECT * FROM item_history
            WHERE item_id IN ({placeholders})
            ORDER BY id
            """,
            list(by_id),
        )
        for row in await cursor.fetchall():
            by_id[row["item_id"]].history.append(self._row_to_record(row))
        return items

    @staticmethod
    async def _insert_record(
        conn: aiosqlite.Connection, item_id: int, record: HistoryRecord
    ) -> HistoryRecord:
        cursor = await conn.execute(
            """
            INSERT INTO item_history (item_id, movement_type, quantity, notes, occurred_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                item_id,
                record.movement_type.value,
                record.quantity,
                record.notes,
                to_db_time(record.occurred_at),
            ),
        )
        return record.model_copy(update={"id": cursor.lastrowid})

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> Item:
        """Convert a database row to an Item entity (history attached separately)."""
        return Item(
            id=row["id"],
            description=row["description"],
            unit=row["unit"],
            category=Category(row["category"]),
            stock_in=float(row["stock_in"]),
            stock_out=float(row["stock_out"]),
            total_stock=float(row["total_stock"]),
            min_stock=float(row["min_stock"]),
            created_at=from_db_time(row["created_at"]),
            updated_at=from_db_time(row["updated_at"]),
        )

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> HistoryRecord:
        """Convert a database row to a HistoryRecord."""
        return HistoryRecord(
            id=row["id"],
            quantity=float(row["quantity"]),
            movement_type=MovementType(row["movement_type"]),
            notes=row["notes"],
            occurred_at=from_db_time(row["occurred_at"]),
        )
