"""List Items Use Case: filtered, sorted, paginated item listing."""

import math
from dataclasses import dataclass, field

from pydantic.alias_generators import to_snake

from stockledger.application.dto.responses import ItemListResponse, ItemResponse
from stockledger.config import get_logger
from stockledger.core.entities.item import Category, Item, StockStatus
from stockledger.core.exceptions import ValidationError
from stockledger.core.interfaces.item_store import IItemStore, ItemQuery

logger = get_logger(__name__)

SORTABLE_FIELDS = frozenset(
    {
        "id",
        "description",
        "unit",
        "category",
        "stock_in",
        "stock_out",
        "total_stock",
        "min_stock",
        "created_at",
        "updated_at",
    }
)

DEFAULT_SORT = "description"
MAX_PAGE_SIZE = 100
# Keeps the row offset inside SQLite's signed 64-bit INTEGER range
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE


@dataclass
class ListItemsParams:
    """Raw listing parameters as received from the query string."""

    category: str | None = None
    search: str | None = None
    unit: str | None = None
    stock_status: str | None = None
    sort_by: str | None = None
    sort_order: str = "asc"
    page: int = 1
    limit: int = 10


@dataclass
class ListItemsResult:
    """One page of items."""

    items: list[Item] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def build_query(params: ListItemsParams) -> ItemQuery:
    """Validate raw parameters into a store query."""
    category = None
    if params.category:
        try:
            category = Category(params.category)
        except ValueError:
            raise ValidationError(
                "category", 'Category must be "accessory" or "tool"', params.category
            ) from None

    stock_status = None
    if params.stock_status:
        try:
            stock_status = StockStatus(params.stock_status)
        except ValueError:
            raise ValidationError(
                "stockStatus",
                "stockStatus must be one of: critical, low, good, out",
                params.stock_status,
            ) from None

    sort_by = to_snake(params.sort_by) if params.sort_by else DEFAULT_SORT
    if sort_by not in SORTABLE_FIELDS:
        raise ValidationError("sortBy", f"Cannot sort by {params.sort_by}", params.sort_by)

    sort_order = (params.sort_order or "asc").lower()
    if sort_order not in ("asc", "desc"):
        raise ValidationError("sortOrder", 'sortOrder must be "asc" or "desc"', params.sort_order)

    if not 1 <= params.page <= MAX_PAGE:
        raise ValidationError("page", f"page must be between 1 and {MAX_PAGE}", params.page)
    if not 1 <= params.limit <= MAX_PAGE_SIZE:
        raise ValidationError(
            "limit", f"limit must be between 1 and {MAX_PAGE_SIZE}", params.limit
        )

    return ItemQuery(
        category=category,
        search=params.search.strip() if params.search and params.search.strip() else None,
        unit=params.unit or None,
        stock_status=stock_status,
        sort_by=sort_by,
        descending=sort_order == "desc",
        page=params.page,
        limit=params.limit,
    )


class ListItemsUseCase:
    """List items with filters, sorting and pagination."""

    def __init__(self, item_store: IItemStore):
        self._item_store = item_store

    async def execute(self, params: ListItemsParams) -> ListItemsResult:
        query = build_query(params)
        page = await self._item_store.list_items(query)
        logger.debug(
            "items_listed",
            total=page.total,
            page=query.page,
            stock_status=query.stock_status.value if query.stock_status else None,
        )
        return ListItemsResult(
            items=page.items,
            total=page.total,
            page=query.page,
            limit=query.limit,
        )

    def to_response(self, result: ListItemsResult) -> ItemListResponse:
        return ItemListResponse(
            items=[ItemResponse.from_entity(item) for item in result.items],
            total=result.total,
            total_pages=result.total_pages,
            current_page=result.page,
        )
