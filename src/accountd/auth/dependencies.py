"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to extract
and validate the current account identity from the request.

The gate has four outcomes:
1. No Authorization header → reject
2. Header present but not "Bearer <token>" → reject
3. Bearer token that fails verification → reject
4. Bearer token that verifies → proceed with the account id

All rejections are the same 401 INVALID_TOKEN, so a caller can't tell
which check failed.
"""

from typing import Optional

import structlog
from fastapi import Depends, Header, Request

from accountd.auth.jwt import TokenError, TokenIssuer
from accountd.auth.password import PasswordHasher
from accountd.errors import InvalidTokenError

BEARER_PREFIX = "Bearer "

logger = structlog.get_logger()


def get_token_issuer(request: Request) -> TokenIssuer:
    """The app-wide token issuer, built from settings in create_app()."""
    return request.app.state.token_issuer


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


async def require_auth(
    request: Request,
    authorization: Optional[str] = Header(None),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> str:
    """Verify the bearer token and return the account id it names.

    The id is also stored on request.state.account_id and bound to the
    structlog context for the rest of the request.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        logger.info("auth.rejected", reason="missing_bearer")
        raise InvalidTokenError()

    token = authorization[len(BEARER_PREFIX):]
    if not token:
        logger.info("auth.rejected", reason="empty_token")
        raise InvalidTokenError()

    try:
        account_id = tokens.verify(token)
    except TokenError:
        logger.info("auth.rejected", reason="token_invalid")
        raise InvalidTokenError() from None

    request.state.account_id = account_id
    structlog.contextvars.bind_contextvars(account_id=account_id)
    return account_id
