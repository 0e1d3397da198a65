"""API route modules."""

from stockledger.api.routes.auth import router as auth_router
from stockledger.api.routes.health import router as health_router
from stockledger.api.routes.items import router as items_router
from stockledger.api.routes.reports import router as reports_router
from stockledger.api.routes.users import router as users_router

__all__ = [
    "health_router",
    "auth_router",
    "items_router",
    "reports_router",
    "users_router",
]
