"""FastAPI application factory.

Learn: App factory pattern — create_app(settings) returns a configured
FastAPI instance. Everything that depends on configuration (database
engine, password hasher, token issuer) is built here from the Settings
passed in and hung on app.state; route dependencies read it back from
the request. Nothing reads environment variables after this point.

Run with uvicorn's factory mode:
    uvicorn accountd.main:create_app --factory
or via the CLI:
    accountd serve
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from accountd import __version__
from accountd.api import api_router
from accountd.api.errors import register_error_handlers
from accountd.auth.jwt import TokenIssuer
from accountd.auth.password import PasswordHasher
from accountd.config import Settings
from accountd.db.engine import build_engine, build_session_factory
from accountd.log import configure_logging
from accountd.middleware.request_id import RequestIdMiddleware
from accountd.middleware.security import SecurityHeadersMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs
    at shutdown. The engine connects lazily, so startup only logs.
    """
    settings: Settings = app.state.settings
    logger.info(
        "accountd.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
        token_expires_in=settings.jwt_expires_in,
    )

    yield

    logger.info("accountd.shutdown")
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application.

    With no argument, Settings are read from the environment; a missing
    ACCOUNTD_DATABASE_URL or ACCOUNTD_JWT_SECRET raises here and the
    process never starts serving.
    """
    if settings is None:
        settings = Settings()
    configure_logging(settings)

    app = FastAPI(
        title="accountd",
        description="User accounts — signup, login with bearer tokens, profile",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_issuer = TokenIssuer.from_settings(settings)

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → CORS → handler
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    register_error_handlers(app)
    app.include_router(api_router)

    return app
