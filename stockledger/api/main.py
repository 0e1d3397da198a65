"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.responses import Response

from stockledger import __version__
from stockledger.api.middleware import (
    ErrorHandlerMiddleware,
    LoggingMiddleware,
    setup_exception_handlers,
)
from stockledger.api.routes import (
    auth_router,
    health_router,
    items_router,
    reports_router,
    users_router,
)
from stockledger.config import Settings, configure_logging, get_logger, get_settings
from stockledger.infrastructure.security import PasswordHasher, TokenService
from stockledger.infrastructure.storage.sqlite import ConnectionPool, run_migrations

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database and opens the connection pool on startup; closes
    the pool on shutdown. Everything lives on ``app.state``.
    """
    settings: Settings = app.state.settings

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
        db_path=str(settings.storage.db_path),
    )

    try:
        results = await run_migrations(settings.storage.db_path)
        failed = [r.version for r in results if not r.success]
        if failed:
            raise RuntimeError(f"Migrations failed: {', '.join(failed)}")
        logger.info("database_initialized", applied=len(results))

        pool = ConnectionPool.from_settings(settings.storage)
        await pool.initialize()
        app.state.pool = pool

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")
    await app.state.pool.close()
    logger.info("application_stopped")


def _mount_dashboard(app: FastAPI, dashboard_dir: Path) -> None:
    """Serve a built React dashboard (vite dist/) with client-side routing."""
    index = dashboard_dir / "index.html"

    assets = dashboard_dir / "assets"
    if assets.exists():
        app.mount("/assets", StaticFiles(directory=str(assets)), name="dashboard-assets")

    @app.get("/", response_model=None, include_in_schema=False)
    async def dashboard_root() -> Response:
        return FileResponse(index)

    # Registered last; API routes all take priority
    @app.get("/{path:path}", response_model=None, include_in_schema=False)
    async def dashboard_catch_all(path: str) -> Response:
        # API paths that don't match a real route should 404, not serve the SPA
        if path.startswith("api/"):
            return JSONResponse(status_code=404, content={"detail": "Not Found"})
        candidate = (dashboard_dir / path).resolve()
        if candidate.is_file() and candidate.is_relative_to(dashboard_dir.resolve()):
            return FileResponse(candidate)
        return FileResponse(index)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Explicit settings; loaded from the environment when omitted

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Inventory stock ledger: items, stock movements, imports and reports",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.password_hasher = PasswordHasher()
    app.state.token_service = TokenService.from_settings(settings.auth)

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials="*" not in settings.api.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(items_router)
    app.include_router(reports_router)
    app.include_router(users_router)

    dashboard_dir = settings.api.dashboard_dir
    if dashboard_dir and (dashboard_dir / "index.html").exists():
        _mount_dashboard(app, dashboard_dir)
        logger.info("dashboard_mounted", path=str(dashboard_dir))

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "stockledger.api.main:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
