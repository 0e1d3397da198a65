"""Abstract interface for item storage."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from stockledger.core.entities.item import Category, Item, StockStatus
from stockledger.core.entities.report import CategorySummary

# Mutates an item in place; raising aborts the whole write
ItemMutation = Callable[[Item], None]


@dataclass
class ItemQuery:
    """Filter, sort and page parameters for listing items."""

    category: Category | None = None
    search: str | None = None
    unit: str | None = None
    stock_status: StockStatus | None = None
    sort_by: str = "description"
    descending: bool = False
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class ItemPage:
    """One page of items plus the unpaged match count."""

    items: list[Item] = field(default_factory=list)
    total: int = 0


class IItemStore(ABC):
    """Interface for item and stock history persistence."""

    @abstractmethod
    async def create_item(self, item: Item) -> Item:
        """Insert an item together with its initial history."""
        pass

    @abstractmethod
    async def get_item(self, item_id: int) -> Item | None:
        """Get item (with history) by ID."""
        pass

    @abstractmethod
    async def find_by_description(
        self, description: str, category: Category
    ) -> Item | None:
        """Case-insensitive exact match on trimmed description within a category."""
        pass

    @abstractmethod
    async def mutate_item(self, item_id: int, mutation: ItemMutation) -> Item | None:
        """
        Atomically read, mutate and persist one item.

        Returns None when the item does not exist. Only history records
        appended by the mutation are written.
        """
        pass

    @abstractmethod
    async def delete_item(self, item_id: int) -> bool:
        """Hard-delete an item and its history."""
        pass

    @abstractmethod
    async def list_items(self, query: ItemQuery) -> ItemPage:
        """List items matching the query."""
        pass

    @abstractmethod
    async def list_critical(self) -> list[Item]:
        """Items whose current stock is below 20% of everything received."""
        pass

    @abstractmethod
    async def list_with_movements(
        self,
        start: datetime,
        end: datetime,
        category: Category | None = None,
    ) -> list[Item]:
        """Items with at least one history record in [start, end)."""
        pass

    @abstractmethod
    async def summarize_by_category(self) -> list[CategorySummary]:
        """Aggregate counters per category."""
        pass

    @abstractmethod
    async def clear_items(self) -> int:
        """Delete every item. Returns the number removed."""
        pass
