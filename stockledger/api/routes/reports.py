"""Reporting endpoints."""

from fastapi import APIRouter, Depends

from stockledger.api.dependencies import (
    get_critical_stock_use_case,
    get_current_user,
    get_daily_movements_use_case,
    get_summary_report_use_case,
)
from stockledger.application.dto.responses import (
    CategorySummaryResponse,
    DailyMovementResponse,
    ErrorResponse,
    ItemResponse,
)
from stockledger.application.use_cases import (
    CriticalStockUseCase,
    DailyMovementsUseCase,
    SummaryReportUseCase,
)

router = APIRouter(
    prefix="/api/reports",
    tags=["reports"],
    dependencies=[Depends(get_current_user)],
    responses={401: {"model": ErrorResponse}},
)


@router.get("/critical-stock", response_model=list[ItemResponse])
async def critical_stock(
    use_case: CriticalStockUseCase = Depends(get_critical_stock_use_case),
) -> list[ItemResponse]:
    """Items whose current stock is below 20% of everything received."""
    items = await use_case.execute()
    return use_case.to_response(items)


@router.get(
    "/daily-movements",
    response_model=list[DailyMovementResponse],
    responses={400: {"model": ErrorResponse}},
)
async def daily_movements(
    date: str | None = None,
    category: str | None = None,
    use_case: DailyMovementsUseCase = Depends(get_daily_movements_use_case),
) -> list[DailyMovementResponse]:
    """
    Movements for one UTC day.

    ``date`` is an ISO day (defaults to today); ``category`` narrows the
    report to accessories or tools.
    """
    reports = await use_case.execute(day=date, category=category)
    return use_case.to_response(reports)


@router.get("/summary", response_model=list[CategorySummaryResponse])
async def summary(
    use_case: SummaryReportUseCase = Depends(get_summary_report_use_case),
) -> list[CategorySummaryResponse]:
    """Counters aggregated per category."""
    summaries = await use_case.execute()
    return use_case.to_response(summaries)
