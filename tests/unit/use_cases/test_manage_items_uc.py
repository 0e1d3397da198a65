"""Tests for item CRUD use cases."""

from unittest.mock import AsyncMock

import pytest

from stockledger.application.dto.requests import CreateItemRequest, UpdateItemRequest
from stockledger.application.use_cases.manage_items import (
    CreateItemUseCase,
    DeleteItemUseCase,
    GetItemUseCase,
    UpdateItemUseCase,
)
from stockledger.core.entities.item import Category, Item
from stockledger.core.exceptions import ItemNotFoundError
from stockledger.core.services import ledger


@pytest.fixture
def mock_item_store():
    return AsyncMock()


def _stored(stock_in: float = 10, stock_out: float = 0) -> Item:
    item = ledger.open_item("Hammer", "pcs", Category.TOOL, stock_in, stock_out)
    item.id = 1
    return item


class TestGetItemUseCase:
    async def test_found(self, mock_item_store):
        mock_item_store.get_item.return_value = _stored()
        item = await GetItemUseCase(item_store=mock_item_store).execute(1)
        assert item.id == 1

    async def test_not_found(self, mock_item_store):
        mock_item_store.get_item.return_value = None
        with pytest.raises(ItemNotFoundError):
            await GetItemUseCase(item_store=mock_item_store).execute(1)


class TestCreateItemUseCase:
    async def test_derives_total_and_empty_history(self, mock_item_store):
        """Test totalStock is computed and client history is never accepted."""

        async def create_item(item):
            item.id = 5
            return item

        mock_item_store.create_item.side_effect = create_item
        request = CreateItemRequest.model_validate(
            {
                "description": " Hammer ",
                "unit": "pcs",
                "category": "tool",
                "stockIn": 10,
                "stockOut": 3,
                "totalStock": 999,
                "history": [{"type": "in", "quantity": 1}],
            }
        )

        item = await CreateItemUseCase(item_store=mock_item_store).execute(request)

        assert item.id == 5
        assert item.description == "Hammer"
        assert item.total_stock == 7
        assert item.history == []


class TestUpdateItemUseCase:
    async def test_recomputes_without_history(self, mock_item_store):
        stored = _stored(stock_in=10)

        async def mutate_item(item_id, mutation):
            mutation(stored)
            return stored

        mock_item_store.mutate_item.side_effect = mutate_item
        request = UpdateItemRequest.model_validate({"stockOut": 12, "totalStock": 50})

        item = await UpdateItemUseCase(item_store=mock_item_store).execute(1, request)

        assert item.stock_out == 12
        assert item.total_stock == 0
        assert item.history == []

    async def test_not_found(self, mock_item_store):
        mock_item_store.mutate_item.return_value = None
        with pytest.raises(ItemNotFoundError):
            await UpdateItemUseCase(item_store=mock_item_store).execute(
                1, UpdateItemRequest(unit="box")
            )


class TestDeleteItemUseCase:
    async def test_deleted(self, mock_item_store):
        mock_item_store.delete_item.return_value = True
        use_case = DeleteItemUseCase(item_store=mock_item_store)

        await use_case.execute(1)

        assert use_case.to_response().message == "Item deleted successfully"

    async def test_not_found(self, mock_item_store):
        mock_item_store.delete_item.return_value = False
        with pytest.raises(ItemNotFoundError):
            await DeleteItemUseCase(item_store=mock_item_store).execute(1)
