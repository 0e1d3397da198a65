"""Item endpoints: listing, CRUD, stock adjustments and bulk import."""

from fastapi import APIRouter, Depends, Path, Query, status

from stockledger.api.dependencies import (
    MAX_ROW_ID,
    get_adjust_stock_use_case,
    get_create_item_use_case,
    get_current_user,
    get_delete_item_use_case,
    get_get_item_use_case,
    get_import_items_use_case,
    get_list_items_use_case,
    get_update_item_use_case,
    require_admin,
)
from stockledger.application.dto.requests import (
    CreateItemRequest,
    ImportItemsRequest,
    StockAdjustmentRequest,
    UpdateItemRequest,
)
from stockledger.application.dto.responses import (
    ErrorResponse,
    ImportResultResponse,
    ItemListResponse,
    ItemResponse,
    MessageResponse,
    StockAdjustmentResponse,
)
from stockledger.application.use_cases import (
    AdjustStockUseCase,
    CreateItemUseCase,
    DeleteItemUseCase,
    GetItemUseCase,
    ImportItemsUseCase,
    ListItemsParams,
    ListItemsUseCase,
    UpdateItemUseCase,
)

router = APIRouter(
    prefix="/api/items",
    tags=["items"],
    responses={401: {"model": ErrorResponse}},
)


@router.get(
    "",
    response_model=ItemListResponse,
    dependencies=[Depends(get_current_user)],
    responses={400: {"model": ErrorResponse}},
)
async def list_items(
    category: str | None = None,
    search: str | None = None,
    unit: str | None = None,
    stock_status: str | None = Query(default=None, alias="stockStatus"),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str = Query(default="asc", alias="sortOrder"),
    page: int = 1,
    limit: int = 10,
    use_case: ListItemsUseCase = Depends(get_list_items_use_case),
) -> ItemListResponse:
    """List items with filters, sorting and pagination."""
    result = await use_case.execute(
        ListItemsParams(
            category=category,
            search=search,
            unit=unit,
            stock_status=stock_status,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            limit=limit,
        )
    )
    return use_case.to_response(result)


@router.post(
    "/import",
    response_model=ImportResultResponse,
    dependencies=[Depends(require_admin)],
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def import_items(
    request: ImportItemsRequest,
    use_case: ImportItemsUseCase = Depends(get_import_items_use_case),
) -> ImportResultResponse:
    """Import spreadsheet rows into one category. Bad rows are reported, not fatal."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/{item_id}",
    response_model=ItemResponse,
    dependencies=[Depends(get_current_user)],
    responses={404: {"model": ErrorResponse}},
)
async def get_item(
    item_id: int = Path(ge=1, le=MAX_ROW_ID),
    use_case: GetItemUseCase = Depends(get_get_item_use_case),
) -> ItemResponse:
    """Get one item with its full history."""
    item = await use_case.execute(item_id)
    return use_case.to_response(item)


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def create_item(
    request: CreateItemRequest,
    use_case: CreateItemUseCase = Depends(get_create_item_use_case),
) -> ItemResponse:
    """Create an item. Its history starts empty."""
    item = await use_case.execute(request)
    return use_case.to_response(item)


@router.put(
    "/{item_id}",
    response_model=ItemResponse,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def update_item(
    request: UpdateItemRequest,
    item_id: int = Path(ge=1, le=MAX_ROW_ID),
    use_case: UpdateItemUseCase = Depends(get_update_item_use_case),
) -> ItemResponse:
    """Corrective edit. totalStock is recomputed; no history is written."""
    item = await use_case.execute(item_id, request)
    return use_case.to_response(item)


@router.delete(
    "/{item_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_item(
    item_id: int = Path(ge=1, le=MAX_ROW_ID),
    use_case: DeleteItemUseCase = Depends(get_delete_item_use_case),
) -> MessageResponse:
    """Hard-delete an item and its history."""
    await use_case.execute(item_id)
    return use_case.to_response()


@router.post(
    "/{item_id}/stock-adjustment",
    response_model=StockAdjustmentResponse,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def adjust_stock(
    request: StockAdjustmentRequest,
    item_id: int = Path(ge=1, le=MAX_ROW_ID),
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> StockAdjustmentResponse:
    """Record a stock IN or OUT movement."""
    result = await use_case.execute(item_id, request)
    return use_case.to_response(result)
