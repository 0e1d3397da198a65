"""Adjust Stock Use Case: one IN or OUT movement against an item."""

from dataclasses import dataclass

from stockledger.application.dto.requests import StockAdjustmentRequest
from stockledger.application.dto.responses import ItemResponse, StockAdjustmentResponse
from stockledger.config import get_logger
from stockledger.core.entities.item import HistoryRecord, Item, MovementType
from stockledger.core.exceptions import ItemNotFoundError
from stockledger.core.interfaces.item_store import IItemStore
from stockledger.core.services import ledger

logger = get_logger(__name__)


@dataclass
class AdjustStockResult:
    """Result of a stock adjustment."""

    item: Item
    record: HistoryRecord

    @property
    def movement_type(self) -> MovementType:
        return self.record.movement_type


class AdjustStockUseCase:
    """
    Apply a stock movement atomically.

    Validation order: movement type, then quantity, then item existence,
    then available stock for OUT. A rejected adjustment leaves the item
    untouched.
    """

    def __init__(self, item_store: IItemStore):
        self._item_store = item_store

    async def execute(self, item_id: int, request: StockAdjustmentRequest) -> AdjustStockResult:
        movement_type = ledger.parse_movement_type(request.type)
        quantity = ledger.parse_quantity(request.quantity)

        logger.info(
            "stock_adjustment_started",
            item_id=item_id,
            type=movement_type.value,
            quantity=quantity,
        )

        def mutation(item: Item) -> None:
            ledger.adjust_stock(item, movement_type, quantity, request.notes)

        item = await self._item_store.mutate_item(item_id, mutation)
        if item is None:
            raise ItemNotFoundError(item_id)

        logger.info(
            "stock_adjusted",
            item_id=item_id,
            type=movement_type.value,
            quantity=quantity,
            total_stock=item.total_stock,
        )
        # The adjustment is always the newest record
        return AdjustStockResult(item=item, record=item.history[-1])

    def to_response(self, result: AdjustStockResult) -> StockAdjustmentResponse:
        return StockAdjustmentResponse(
            message=f"Stock {result.movement_type.value} updated successfully",
            item=ItemResponse.from_entity(result.item),
        )
