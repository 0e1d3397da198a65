"""Import Items Use Case: additive bulk import of spreadsheet rows."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from stockledger.application.dto.requests import ImportItemsRequest
from stockledger.application.dto.responses import ImportResultResponse
from stockledger.config import get_logger
from stockledger.core.entities.item import Category
from stockledger.core.exceptions import (
    ImportRowError,
    StockLedgerError,
    StorageError,
    ValidationError,
)
from stockledger.core.interfaces.item_store import IItemStore
from stockledger.core.services import ledger
from stockledger.core.services.row_import import ParsedRow, parse_row

logger = get_logger(__name__)


@dataclass
class ImportResult:
    """Outcome of one import batch."""

    created: int = 0
    updated: int = 0
    errors: list[str] = field(default_factory=list)


class ImportItemsUseCase:
    """
    Import rows into one category.

    Rows are processed in order and independently. A row that names an
    existing item (same category, description matched case-insensitively)
    adds onto its counters; otherwise a new item is opened. Bad rows are
    reported and skipped; only an unusable request fails the whole batch.
    """

    def __init__(self, item_store: IItemStore):
        self._item_store = item_store

    async def execute(self, request: ImportItemsRequest) -> ImportResult:
        category = self._parse_category(request.category)
        rows = self._parse_rows(request.data)

        logger.info("import_started", category=category.value, rows=len(rows))

        result = ImportResult()
        for index, row in enumerate(rows):
            row_number = index + 1
            try:
                parsed = parse_row(row, row_number)
                if await self._apply_row(parsed, category):
                    result.created += 1
                else:
                    result.updated += 1
            except StorageError:
                raise
            except StockLedgerError as e:
                # ImportRowError messages already carry the row prefix
                if isinstance(e, ImportRowError):
                    message = e.message
                else:
                    message = f"Row {row_number}: {e.message}"
                logger.warning("import_row_failed", row=row_number, error=message)
                result.errors.append(message)

        logger.info(
            "import_complete",
            category=category.value,
            created=result.created,
            updated=result.updated,
            errors=len(result.errors),
        )
        return result

    async def _apply_row(self, row: ParsedRow, category: Category) -> bool:
        """Merge or create. Returns True when a new item was created."""
        existing = await self._item_store.find_by_description(row.description, category)
        if existing is not None:
            merged = await self._item_store.mutate_item(
                existing.id,
                lambda item: ledger.merge_import(item, row.stock_in, row.stock_out),
            )
            if merged is not None:
                return False
            # Deleted between lookup and merge; fall through and recreate

        item = ledger.open_imported_item(
            description=row.description,
            unit=row.unit,
            category=category,
            stock_in=row.stock_in,
            stock_out=row.stock_out,
        )
        await self._item_store.create_item(item)
        return True

    @staticmethod
    def _parse_category(value: Any) -> Category:
        try:
            return Category(value)
        except ValueError:
            raise ValidationError(
                "category", 'Import failed: category must be "accessory" or "tool"', value
            ) from None

    @staticmethod
    def _parse_rows(value: Any) -> Sequence[Any]:
        if not isinstance(value, list):
            raise ValidationError("data", "Import failed: data must be a list of rows")
        return value

    def to_response(self, result: ImportResult) -> ImportResultResponse:
        return ImportResultResponse(
            created=result.created,
            updated=result.updated,
            errors=result.errors,
        )
