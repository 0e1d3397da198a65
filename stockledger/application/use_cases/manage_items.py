"""Item CRUD use cases: get, create, corrective update, delete."""

from stockledger.application.dto.requests import CreateItemRequest, UpdateItemRequest
from stockledger.application.dto.responses import ItemResponse, MessageResponse
from stockledger.config import get_logger
from stockledger.core.entities.item import Item
from stockledger.core.exceptions import ItemNotFoundError
from stockledger.core.interfaces.item_store import IItemStore
from stockledger.core.services import ledger

logger = get_logger(__name__)


class GetItemUseCase:
    """Fetch one item with its full history."""

    def __init__(self, item_store: IItemStore):
        self._item_store = item_store

    async def execute(self, item_id: int) -> Item:
        item = await self._item_store.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    def to_response(self, item: Item) -> ItemResponse:
        return ItemResponse.from_entity(item)


class CreateItemUseCase:
    """Create an item with an empty history."""

    def __init__(self, item_store: IItemStore):
        self._item_store = item_store

    async def execute(self, request: CreateItemRequest) -> Item:
        item = ledger.open_item(
            description=request.description,
            unit=request.unit,
            category=request.category,
            stock_in=request.stock_in,
            stock_out=request.stock_out,
            min_stock=request.min_stock,
        )
        item = await self._item_store.create_item(item)
        logger.info("item_registered", item_id=item.id, total_stock=item.total_stock)
        return item

    def to_response(self, item: Item) -> ItemResponse:
        return ItemResponse.from_entity(item)


class UpdateItemUseCase:
    """
    Corrective edit of item fields.

    Counters may be overwritten directly; ``total_stock`` is recomputed and
    no history record is written.
    """

    def __init__(self, item_store: IItemStore):
        self._item_store = item_store

    async def execute(self, item_id: int, request: UpdateItemRequest) -> Item:
        changes = request.model_dump(exclude_unset=True)
        item = await self._item_store.mutate_item(
            item_id, lambda item: ledger.apply_field_update(item, changes)
        )
        if item is None:
            raise ItemNotFoundError(item_id)
        logger.info("item_corrected", item_id=item_id, fields=sorted(changes))
        return item

    def to_response(self, item: Item) -> ItemResponse:
        return ItemResponse.from_entity(item)


class DeleteItemUseCase:
    """Hard-delete an item and its history."""

    def __init__(self, item_store: IItemStore):
        self._item_store = item_store

    async def execute(self, item_id: int) -> None:
        if not await self._item_store.delete_item(item_id):
            raise ItemNotFoundError(item_id)

    def to_response(self) -> MessageResponse:
        return MessageResponse(message="Item deleted successfully")
