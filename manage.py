#!/usr/bin/env python3
"""
Stock ledger management CLI.

Usage:
    python manage.py serve          Start the API server
    python manage.py migrate        Apply pending database migrations
    python manage.py seed           Create the default admin/user accounts
    python manage.py clear-items    Delete every item and its history
"""

import argparse
import asyncio
import json
import sys

from stockledger.application.use_cases import SeedUsersUseCase
from stockledger.config import Settings, configure_logging, get_settings
from stockledger.infrastructure.security import PasswordHasher
from stockledger.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteItemStore,
    SQLiteUserStore,
    get_migration_status,
    run_migrations,
    verify_schema_integrity,
)


async def _migrated_pool(settings: Settings) -> ConnectionPool:
    """Bring the schema up to date and open a small pool."""
    results = await run_migrations(settings.storage.db_path)
    if any(not r.success for r in results):
        raise SystemExit("Migrations failed; see log output")
    pool = ConnectionPool(
        settings.storage.db_path,
        pool_size=1,
        busy_timeout=settings.storage.busy_timeout,
    )
    await pool.initialize()
    return pool


def cmd_serve(args: argparse.Namespace) -> None:
    """Run uvicorn against the application factory."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "stockledger.api.main:create_app",
        factory=True,
        host=args.host or settings.api.host,
        port=args.port or settings.api.port,
        reload=args.reload,
    )


def cmd_migrate(args: argparse.Namespace) -> None:
    settings = get_settings()
    db_path = settings.storage.db_path

    if args.status:
        status = asyncio.run(get_migration_status(db_path))
        print(json.dumps(status, indent=2))
        return

    if args.verify:
        checks = asyncio.run(verify_schema_integrity(db_path))
        print(json.dumps(checks, indent=2))
        if any(c["status"] != "PASS" for c in checks):
            sys.exit(1)
        return

    results = asyncio.run(run_migrations(db_path, create_backup_before=args.backup))
    if not results:
        print("Database is up to date.")
    for result in results:
        state = "ok" if result.success else f"FAILED: {result.error}"
        print(f"v{result.version}_{result.name}: {state} ({result.execution_time_ms} ms)")
    if any(not r.success for r in results):
        sys.exit(1)


def cmd_seed(args: argparse.Namespace) -> None:
    async def seed() -> list[str]:
        pool = await _migrated_pool(get_settings())
        try:
            use_case = SeedUsersUseCase(SQLiteUserStore(pool), PasswordHasher())
            return [user.username for user in await use_case.execute()]
        finally:
            await pool.close()

    created = asyncio.run(seed())
    if created:
        print(f"Created users: {', '.join(created)}")
    else:
        print("Default users already exist.")


def cmd_clear_items(args: argparse.Namespace) -> None:
    if not args.yes:
        answer = input("Delete ALL items and their history? [y/N] ")
        if answer.strip().lower() != "y":
            print("Aborted.")
            return

    async def clear() -> int:
        pool = await _migrated_pool(get_settings())
        try:
            return await SQLiteItemStore(pool).clear_items()
        finally:
            await pool.close()

    removed = asyncio.run(clear())
    print(f"Deleted {removed} items.")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Stock ledger management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default=None, help="Bind host (default: API_HOST)")
    p_serve.add_argument("--port", type=int, default=None, help="Bind port (default: API_PORT)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending database migrations")
    p_migrate.add_argument("--status", action="store_true", help="Show migration status only")
    p_migrate.add_argument("--verify", action="store_true", help="Run schema integrity checks")
    p_migrate.add_argument("--backup", action="store_true", help="Back up the database first")
    p_migrate.set_defaults(func=cmd_migrate)

    # seed
    p_seed = sub.add_parser("seed", help="Create default admin/admin123 and user/user123")
    p_seed.set_defaults(func=cmd_seed)

    # clear-items
    p_clear = sub.add_parser("clear-items", help="Delete every item and its history")
    p_clear.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    p_clear.set_defaults(func=cmd_clear_items)

    args = parser.parse_args()
    configure_logging(get_settings())
    args.func(args)


if __name__ == "__main__":
    main()
