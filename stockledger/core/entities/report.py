"""Read models produced by the reporting queries."""

from dataclasses import dataclass, field

from stockledger.core.entities.item import Category, HistoryRecord, Item


@dataclass
class CategorySummary:
    """Aggregated counters for one category."""

    category: Category
    total_items: int = 0
    total_stock_in: float = 0.0
    total_stock_out: float = 0.0
    total_current_stock: float = 0.0


@dataclass
class DailyMovement:
    """An item together with its movements inside one reporting window."""

    item: Item
    daily_in: float = 0.0
    daily_out: float = 0.0
    movements: list[HistoryRecord] = field(default_factory=list)

    @property
    def total_movements(self) -> int:
        return len(self.movements)
