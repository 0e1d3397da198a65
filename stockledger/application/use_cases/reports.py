"""Reporting use cases: critical stock, daily movements, category summary."""

from datetime import UTC, date, datetime

from stockledger.application.dto.responses import (
    CategorySummaryResponse,
    DailyMovementResponse,
    ItemResponse,
)
from stockledger.config import get_logger
from stockledger.core.entities.item import Category, Item
from stockledger.core.entities.report import CategorySummary, DailyMovement
from stockledger.core.exceptions import ValidationError
from stockledger.core.interfaces.item_store import IItemStore
from stockledger.core.services.reporting import day_window, summarize_movements

logger = get_logger(__name__)


class CriticalStockUseCase:
    """Items whose current stock is below 20% of everything received."""

    def __init__(self, item_store: IItemStore):
        self._item_store = item_store

    async def execute(self) -> list[Item]:
        items = await self._item_store.list_critical()
        logger.debug("critical_stock_report", items=len(items))
        return items

    def to_response(self, items: list[Item]) -> list[ItemResponse]:
        return [ItemResponse.from_entity(item) for item in items]


class DailyMovementsUseCase:
    """Per-item movement totals for one UTC day."""

    def __init__(self, item_store: IItemStore):
        self._item_store = item_store

    async def execute(
        self,
        day: str | date | None = None,
        category: str | None = None,
    ) -> list[DailyMovement]:
        report_day = self._parse_day(day)
        report_category = self._parse_category(category)
        start, end = day_window(report_day)

        items = await self._item_store.list_with_movements(start, end, report_category)
        reports = [
            report
            for report in (summarize_movements(item, start, end) for item in items)
            if report is not None
        ]
        logger.debug(
            "daily_movements_report",
            day=report_day.isoformat(),
            category=report_category.value if report_category else None,
            items=len(reports),
        )
        return reports

    @staticmethod
    def _parse_day(value: str | date | None) -> date:
        if value is None or value == "":
            return datetime.now(UTC).date()
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise ValidationError("date", "date must be an ISO day (YYYY-MM-DD)", value) from None

    @staticmethod
    def _parse_category(value: str | None) -> Category | None:
        if not value:
            return None
        try:
            return Category(value)
        except ValueError:
            raise ValidationError(
                "category", 'Category must be "accessory" or "tool"', value
            ) from None

    def to_response(self, reports: list[DailyMovement]) -> list[DailyMovementResponse]:
        return [DailyMovementResponse.from_report(report) for report in reports]


class SummaryReportUseCase:
    """Counters aggregated per category."""

    def __init__(self, item_store: IItemStore):
        self._item_store = item_store

    async def execute(self) -> list[CategorySummary]:
        return await self._item_store.summarize_by_category()

    def to_response(self, summaries: list[CategorySummary]) -> list[CategorySummaryResponse]:
        return [CategorySummaryResponse.from_entity(s) for s in summaries]
