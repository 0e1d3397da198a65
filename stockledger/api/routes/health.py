"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from stockledger.api.dependencies import get_app_settings, get_pool
from stockledger.application.dto.responses import HealthResponse
from stockledger.config import Settings, get_logger
from stockledger.core.exceptions import DatabaseError
from stockledger.infrastructure.storage.sqlite import ConnectionPool

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_app_settings),
    pool: ConnectionPool = Depends(get_pool),
) -> HealthResponse:
    """
    Service health, including a database round trip.

    Reports ``degraded`` rather than failing when the database is unreachable.
    """
    database = "ok"
    try:
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
    except DatabaseError as e:
        logger.warning("health_db_check_failed", error=str(e))
        database = "error"

    return HealthResponse(
        status="ok" if database == "ok" else "degraded",
        version=settings.app_version,
        uptime_seconds=round(time.time() - _start_time, 3),
        database=database,
    )
