"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running
and the database is reachable. A database failure is reported in the
body (state "degraded") rather than as an error status, so load
balancers can tell "process up" from "dependency down".
"""

import structlog
from fastapi import APIRouter, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from accountd import __version__
from accountd.schemas.account import Envelope, HealthData

router = APIRouter()

logger = structlog.get_logger()


async def check_database(engine: AsyncEngine) -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("health.database_unreachable", error_type=type(e).__name__)
        return False
    return True


@router.get("/health", response_model=Envelope[HealthData])
async def health_check(request: Request):
    """Check server health and database connectivity."""
    database_ok = await check_database(request.app.state.engine)
    return Envelope(
        data=HealthData(
            server="ok",
            version=__version__,
            database="ok" if database_ok else "error",
            state="healthy" if database_ok else "degraded",
        )
    )
