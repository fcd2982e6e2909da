"""accountd CLI — run the service and bootstrap its database.

Usage:
    accountd serve                      # Run the API (host/port from ACCOUNTD_*)
    accountd serve --port 9000 --reload # Override port, auto-reload for dev
    accountd create-tables              # Create tables directly (dev only; use alembic otherwise)
"""

from __future__ import annotations

import asyncio
from typing import Optional

import click
import uvicorn
from pydantic import ValidationError

from accountd.config import Settings

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_settings() -> Settings:
    """Read configuration, turning validation errors into a clean exit."""
    try:
        return Settings()
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration:\n{e}") from e


async def _create_tables(settings: Settings) -> None:
    from accountd.db.engine import build_engine
    from accountd.db.models import Base

    engine = build_engine(settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@click.group()
def cli() -> None:
    """accountd — user account service."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: ACCOUNTD_HOST).")
@click.option("--port", type=int, default=None, help="Port (default: ACCOUNTD_PORT).")
@click.option("--reload", is_flag=True, help="Reload on code changes.")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Run the HTTP API."""
    settings = _load_settings()
    uvicorn.run(
        "accountd.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@cli.command("create-tables")
def create_tables() -> None:
    """Create all tables from the ORM models."""
    settings = _load_settings()
    asyncio.run(_create_tables(settings))
    click.echo("Tables created.")


if __name__ == "__main__":
    cli()
